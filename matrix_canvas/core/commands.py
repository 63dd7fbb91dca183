# -*- coding: utf-8 -*-
"""Undo/Redo over scene snapshots.

Scene values are immutable, so an undo step is just the value before and after
a change plus the callback that makes one of them current again::

    stack.push(SnapshotCommand(before, after, controller.publish, "Delete matrix A"),
               execute=False)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .model import SceneModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotCommand:
    before: SceneModel
    after: SceneModel
    apply: Callable[[SceneModel], None]
    desc: str = ""

    def do(self) -> None:
        self.apply(self.after)

    def undo(self) -> None:
        self.apply(self.before)


class CommandStack:
    """Linear history; pushing a new step discards everything redoable."""

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._done: List[SnapshotCommand] = []
        self._undone: List[SnapshotCommand] = []
        self._on_change = on_change

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()
        self._changed()

    def push(self, cmd: SnapshotCommand, execute: bool = True) -> None:
        if execute:
            cmd.do()
        self._done.append(cmd)
        self._undone.clear()
        logger.debug("push: %s", cmd.desc)
        self._changed()

    def _step(self, src: List[SnapshotCommand], dst: List[SnapshotCommand], forward: bool) -> bool:
        if not src:
            return False
        cmd = src.pop()
        if forward:
            cmd.do()
        else:
            cmd.undo()
        dst.append(cmd)
        logger.debug("%s: %s", "redo" if forward else "undo", cmd.desc)
        self._changed()
        return True

    def undo(self) -> bool:
        return self._step(self._done, self._undone, forward=False)

    def redo(self) -> bool:
        return self._step(self._undone, self._done, forward=True)

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo_text(self) -> str:
        return self._done[-1].desc if self._done else ""

    def redo_text(self) -> str:
        return self._undone[-1].desc if self._undone else ""
