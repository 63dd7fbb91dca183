# -*- coding: utf-8 -*-
"""Ribbon layout description and builder (pyqtribbon).

The layout is plain data (:class:`RibbonSpec`); :func:`build_ribbon` turns it
into a ``RibbonBar`` using the actions registered by the main window.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

from PyQt6 import sip
from PyQt6.QtCore import QSize, Qt
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QStyle, QToolButton
from pyqtribbon import RibbonBar

ICON_SIZE = QSize(28, 28)
RIBBON_HEIGHT = 105


@dataclass(frozen=True)
class RibbonItemSpec:
    key: str


@dataclass(frozen=True)
class RibbonPanelSpec:
    title: str
    items: tuple[RibbonItemSpec, ...]


@dataclass(frozen=True)
class RibbonCategorySpec:
    title: str
    key: str
    panels: tuple[RibbonPanelSpec, ...]


@dataclass(frozen=True)
class RibbonSpec:
    categories: tuple[RibbonCategorySpec, ...] = field(default_factory=tuple)


def build_matrix_ribbon_spec() -> RibbonSpec:
    return RibbonSpec(
        categories=(
            RibbonCategorySpec("Home", "home", (
                RibbonPanelSpec("File", (
                    RibbonItemSpec("act_file_new"),
                    RibbonItemSpec("act_file_open"),
                    RibbonItemSpec("act_file_save"),
                    RibbonItemSpec("act_file_save_as"),
                )),
                RibbonPanelSpec("Edit", (
                    RibbonItemSpec("act_undo"),
                    RibbonItemSpec("act_redo"),
                    RibbonItemSpec("act_reset_data"),
                )),
            )),
            RibbonCategorySpec("View", "view", (
                RibbonPanelSpec("Navigate", (
                    RibbonItemSpec("act_reset_view"),
                    RibbonItemSpec("act_zoom_in"),
                    RibbonItemSpec("act_zoom_out"),
                )),
                RibbonPanelSpec("Theme", (
                    RibbonItemSpec("act_dark_theme"),
                )),
            )),
        )
    )


STANDARD_ICONS = {
    "act_file_new": QStyle.StandardPixmap.SP_FileIcon,
    "act_file_open": QStyle.StandardPixmap.SP_DialogOpenButton,
    "act_file_save": QStyle.StandardPixmap.SP_DialogSaveButton,
    "act_file_save_as": QStyle.StandardPixmap.SP_DriveFDIcon,
    "act_undo": QStyle.StandardPixmap.SP_ArrowBack,
    "act_redo": QStyle.StandardPixmap.SP_ArrowForward,
    "act_reset_data": QStyle.StandardPixmap.SP_BrowserReload,
    "act_reset_view": QStyle.StandardPixmap.SP_DesktopIcon,
    "act_zoom_in": QStyle.StandardPixmap.SP_ArrowUp,
    "act_zoom_out": QStyle.StandardPixmap.SP_ArrowDown,
    "act_dark_theme": QStyle.StandardPixmap.SP_DialogHelpButton,
}


def assign_default_icons(actions: dict[str, QAction], style: QStyle) -> None:
    for key, action in actions.items():
        if action.icon().isNull() and key in STANDARD_ICONS:
            action.setIcon(style.standardIcon(STANDARD_ICONS[key]))


def _apply_action_state(action: QAction, btn: QToolButton) -> None:
    btn.setEnabled(action.isEnabled())
    btn.setText(action.text())
    if btn.isCheckable() != action.isCheckable():
        btn.setCheckable(action.isCheckable())
    if action.isCheckable():
        btn.setChecked(action.isChecked())


def _bind_button(action: QAction, btn: QToolButton) -> None:
    """Mirror the action's enabled/checked state on a ribbon button."""
    _apply_action_state(action, btn)
    btn.clicked.connect(action.trigger)
    btn_ref = weakref.ref(btn)

    def _sync() -> None:
        target = btn_ref()
        if target is None or sip.isdeleted(target):
            try:
                action.changed.disconnect(_sync)
            except (TypeError, RuntimeError):
                pass
            return
        _apply_action_state(action, target)

    action.changed.connect(_sync)


def _hide_panel_option_button(panel: object) -> None:
    getter = getattr(panel, "panelOptionButton", None)
    if callable(getter) and getter() is not None:
        getter().hide()


def build_ribbon(mainwindow, spec: RibbonSpec, actions: dict[str, QAction]) -> RibbonBar:
    ribbon = RibbonBar(mainwindow)
    if hasattr(ribbon, "setRibbonHeight"):
        ribbon.setRibbonHeight(RIBBON_HEIGHT)
    app_btn = getattr(ribbon, "applicationOptionButton", None)
    if callable(app_btn) and app_btn() is not None:
        app_btn().hide()

    for category_spec in spec.categories:
        category = ribbon.addCategory(category_spec.title)
        for panel_spec in category_spec.panels:
            panel = category.addPanel(panel_spec.title)
            _hide_panel_option_button(panel)
            for item in panel_spec.items:
                action = actions[item.key]
                btn = panel.addLargeButton(action.text(), action.icon())
                if isinstance(btn, QToolButton):
                    btn.setIconSize(ICON_SIZE)
                    btn.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextUnderIcon)
                    _bind_button(action, btn)
    return ribbon
