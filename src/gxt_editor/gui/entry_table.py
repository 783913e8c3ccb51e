"""エントリ一覧テーブル"""

import logging
from typing import List, Optional

from PySide6.QtCore import QAbstractItemModel, QModelIndex, Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QLineEdit,
    QPlainTextEdit,
    QStyledItemDelegate,
    QStyleOptionViewItem,
    QTableWidget,
    QTableWidgetItem,
    QWidget,
)

from gxt_editor.core.editor_controller import EditorController
from gxt_editor.core.key_normalizer import normalize_key

logger = logging.getLogger(__name__)

KEY_COLUMN = 0
VALUE_COLUMN = 1
PROBLEM_COLUMN = 2

INVALID_KEY_COLOR = QColor(255, 220, 220)


class KeyEditDelegate(QStyledItemDelegate):
    """入力のたびにKEYを正規化するエディタ"""

    def createEditor(
        self, parent: QWidget, option: QStyleOptionViewItem, index: QModelIndex
    ) -> QWidget:
        editor = QLineEdit(parent)
        editor.textEdited.connect(lambda text: self._normalize(editor, text))
        return editor

    @staticmethod
    def _normalize(editor: QLineEdit, text: str) -> None:
        normalized = normalize_key(text)
        if normalized != text:
            cursor = min(editor.cursorPosition(), len(normalized))
            editor.setText(normalized)
            editor.setCursorPosition(cursor)


class ValueEditDelegate(QStyledItemDelegate):
    """複数行のVALUEを編集するエディタ"""

    def createEditor(
        self, parent: QWidget, option: QStyleOptionViewItem, index: QModelIndex
    ) -> QWidget:
        return QPlainTextEdit(parent)

    def setEditorData(self, editor: QWidget, index: QModelIndex) -> None:
        editor.setPlainText(index.data(Qt.ItemDataRole.EditRole) or "")

    def setModelData(
        self, editor: QWidget, model: QAbstractItemModel, index: QModelIndex
    ) -> None:
        model.setData(index, editor.toPlainText(), Qt.ItemDataRole.EditRole)


class EntryTable(QTableWidget):
    """DocumentStoreのエントリを表示・編集するテーブル"""

    def __init__(self, controller: EditorController, parent: Optional[QWidget] = None):
        super().__init__(0, 3, parent)
        self.controller = controller
        self.setHorizontalHeaderLabels(["KEY", "VALUE", "Problem"])
        self.horizontalHeader().setStretchLastSection(True)
        self.setWordWrap(True)
        self.setItemDelegateForColumn(KEY_COLUMN, KeyEditDelegate(self))
        self.setItemDelegateForColumn(VALUE_COLUMN, ValueEditDelegate(self))
        self.itemChanged.connect(self._on_item_changed)

    def entry_id_at(self, row: int) -> Optional[int]:
        """行に対応するエントリのハンドルを取得する"""
        item = self.item(row, KEY_COLUMN)
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def selected_entry_ids(self) -> List[int]:
        rows = sorted({index.row() for index in self.selectedIndexes()})
        return [i for i in (self.entry_id_at(row) for row in rows) if i is not None]

    def refresh(self) -> None:
        """ストアの内容でテーブルを再構築する"""
        store = self.controller.store
        report = store.validation
        entries = store.entries

        # 編集中のアイテムを削除しないよう、既存のアイテムは書き換えて再利用する
        self.blockSignals(True)
        try:
            self.setRowCount(len(entries))
            for row, entry in enumerate(entries):
                key_item = self._item_at(row, KEY_COLUMN)
                key_item.setText(entry.key)
                key_item.setData(Qt.ItemDataRole.UserRole, entry.id)
                key_item.setBackground(
                    QBrush() if report.is_valid(entry.id) else QBrush(INVALID_KEY_COLOR)
                )
                self._item_at(row, VALUE_COLUMN).setText(entry.value)

                problem_item = self._item_at(row, PROBLEM_COLUMN)
                problem_item.setText(", ".join(report.messages_for(entry.id)))
                problem_item.setFlags(problem_item.flags() & ~Qt.ItemFlag.ItemIsEditable)

                self.setVerticalHeaderItem(row, QTableWidgetItem(f"#{row + 1}"))
        finally:
            self.blockSignals(False)
        self.resizeRowsToContents()

    def _item_at(self, row: int, column: int) -> QTableWidgetItem:
        item = self.item(row, column)
        if item is None:
            item = QTableWidgetItem()
            self.setItem(row, column, item)
        return item

    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        entry_id = self.entry_id_at(item.row())
        if entry_id is None:
            return
        if item.column() == KEY_COLUMN:
            self.controller.edit_key(entry_id, item.text())
        elif item.column() == VALUE_COLUMN:
            self.controller.edit_value(entry_id, item.text())
