"""ファイル選択と確認ダイアログ"""

import logging
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QMessageBox, QWidget

from gxt_editor.core.constants import GXT_FILE_FILTER, GXT_FILE_SUFFIX

logger = logging.getLogger(__name__)

_FILE_FILTERS = f"{GXT_FILE_FILTER};;All Files (*)"


def pick_open_path(parent: Optional[QWidget]) -> Optional[str]:
    """開くGXTファイルを選択する（キャンセル時はNone）"""
    filepath, _ = QFileDialog.getOpenFileName(parent, "Open GXT", "", _FILE_FILTERS)
    return filepath or None


def pick_save_path(parent: Optional[QWidget], default_path: Optional[str]) -> Optional[str]:
    """保存先を選択する（キャンセル時はNone）

    .gxt拡張子が付いていなければ追加します。
    """
    filepath, _ = QFileDialog.getSaveFileName(
        parent, "Save GXT As", default_path or "", _FILE_FILTERS
    )
    if not filepath:
        return None
    if not filepath.lower().endswith(GXT_FILE_SUFFIX):
        filepath += GXT_FILE_SUFFIX
    logger.debug(f"保存先が選択されました: {filepath}")
    return filepath


def confirm_discard(parent: Optional[QWidget]) -> bool:
    """未保存の変更を破棄して続行するか確認する"""
    answer = QMessageBox.question(
        parent,
        "Unsaved changes",
        "Your changes are not saved. Continuing will discard them.",
        QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
        QMessageBox.StandardButton.Cancel,
    )
    return answer == QMessageBox.StandardButton.Discard
