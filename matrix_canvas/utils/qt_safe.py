# -*- coding: utf-8 -*-
"""Qt event safety helpers.

An uncaught exception inside a Qt event handler can terminate the app under
PyQt6. This decorator logs the traceback, ignores the event and keeps the app
alive.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


def safe_event(fn: Callable[..., T]) -> Callable[..., T | None]:
    """Decorator for Qt event handlers."""

    @functools.wraps(fn)
    def wrapper(self: Any, e: Any) -> T | None:
        try:
            return fn(self, e)
        except Exception:
            logger.exception("unhandled error in %s.%s", type(self).__name__, fn.__name__)
            if hasattr(e, "ignore"):
                e.ignore()
            return None

    return wrapper
