# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import log_level_from_env
from .logging_config import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="matrix-canvas", description="Matrix grid and arrow sketch editor.")
    p.add_argument("--debug", action="store_true", help="log at DEBUG level")
    p.add_argument("--log-file", default=None, help="also write the log to this file")
    p.add_argument("file", nargs="?", default=None, help="scene JSON file to open")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    level = logging.DEBUG if args.debug else log_level_from_env()
    setup_logging(level, args.log_file)

    from PyQt6.QtWidgets import QApplication
    from .ui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    w = MainWindow()
    if args.file:
        w.open_path(args.file)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
