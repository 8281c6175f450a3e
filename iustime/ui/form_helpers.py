# Rev 0.2.0
# Shared editor widgets: ISO date edits and labelled enum combos.
from __future__ import annotations
from typing import Mapping, Optional, Sequence

from PySide6.QtCore import QDate
from PySide6.QtWidgets import QComboBox, QDateEdit


def date_edit(value: Optional[str]) -> QDateEdit:
    w = QDateEdit()
    w.setCalendarPopup(True)
    w.setDisplayFormat("yyyy-MM-dd")
    d = QDate.fromString(value or "", "yyyy-MM-dd")
    w.setDate(d if d.isValid() else QDate.currentDate())
    return w


def date_text(w: QDateEdit) -> str:
    return w.date().toString("yyyy-MM-dd")


def enum_combo(values: Sequence[str], labels: Mapping[str, str], current: Optional[str]) -> QComboBox:
    """Combo showing Spanish labels with the stored value as item data; unknown values are kept."""
    cmb = QComboBox()
    for v in values:
        cmb.addItem(labels.get(v, v), v)
    if current and cmb.findData(current) < 0:
        cmb.addItem(current, current)
    ix = cmb.findData(current)
    if ix >= 0:
        cmb.setCurrentIndex(ix)
    return cmb


def select_data(cmb: QComboBox, value) -> None:
    ix = cmb.findData(value)
    cmb.setCurrentIndex(ix if ix >= 0 else 0)
