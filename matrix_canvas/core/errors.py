# -*- coding: utf-8 -*-
"""Errors raised by scene mutations and the command interpreter.

All of them are recoverable user-input errors. The interpreter records them
per line; the UI shows them in a message box or the status bar.
"""

from __future__ import annotations


class SceneError(ValueError):
    pass


class ReservedNameError(SceneError):
    pass


class MalformedSizeError(SceneError):
    pass


class MalformedPositionError(SceneError):
    pass


class MalformedEndpointError(SceneError):
    pass


class UnknownMatrixError(SceneError):
    pass


class IndexOutOfRangeError(SceneError):
    pass


class InvalidNumberError(SceneError):
    pass


class UnrecognizedCommandError(SceneError):
    pass


class ImportFormatError(SceneError):
    pass


class MalformedNameError(SceneError):
    pass
