"""メインウィンドウ"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, Dict, List, Optional, TypeVar

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QMenu, QWidget

from gxt_editor.config import Config, get_config
from gxt_editor.core.constants import BusyState, Severity
from gxt_editor.core.editor_controller import EditorController
from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.service_factory import get_gxt_service
from gxt_editor.gui import dialogs
from gxt_editor.gui.entry_table import KEY_COLUMN, VALUE_COLUMN, EntryTable

logger = logging.getLogger(__name__)

T = TypeVar("T")

APP_TITLE = "GXT Editor"

# 通知の表示時間（ミリ秒）
MESSAGE_TIMEOUT = {
    Severity.SUCCESS: 3000,
    Severity.INFO: 3000,
    Severity.ERROR: 6000,
}


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """コルーチンを完了まで実行する"""
    return asyncio.run(coro)


class MainWindow(QMainWindow):
    """メインウィンドウ"""

    def __init__(
        self,
        service: Optional[GxtService] = None,
        config: Optional[Config] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        """初期化

        Args:
            service: ロード/セーブサービス（省略時は設定から取得）
            config: 設定（省略時は共有インスタンス）
            parent: 親ウィジェット
        """
        super().__init__(parent)
        self.config = config or get_config()
        self.controller = EditorController(
            service or get_gxt_service(self.config.get("gxt_service")),
            pick_open_path=lambda: dialogs.pick_open_path(self),
            pick_save_path=lambda default: dialogs.pick_save_path(self, default),
            notify=self._show_notification,
            config=self.config,
            on_busy_changed=self._on_busy_changed,
        )
        self.table = EntryTable(self.controller)
        self.status_label = QLabel()
        self.toolbar_actions: Dict[str, QAction] = {}
        self.recent_files_menu = QMenu("Open Recent", self)
        self.recent_file_actions: List[QAction] = []

        self._setup_ui()
        self.controller.store.add_listener(self._on_document_changed)
        self._on_document_changed()

    def _setup_ui(self) -> None:
        """UIの初期化"""
        width, height = self.config.get("ui.window_size", [900, 600])
        self.resize(width, height)
        self.setCentralWidget(self.table)
        self.table.setColumnWidth(KEY_COLUMN, self.config.get("ui.column_widths.key", 140))
        self.table.setColumnWidth(
            VALUE_COLUMN, self.config.get("ui.column_widths.value", 520)
        )

        toolbar = self.addToolBar("Main")
        toolbar.setObjectName("main_toolbar")
        for name, text, shortcut, callback in (
            ("new", "New", QKeySequence.StandardKey.New, self.new_document),
            ("open", "Open", QKeySequence.StandardKey.Open, self.open_file),
            ("add", "Add", None, self.add_entry),
            ("delete", "Delete", QKeySequence.StandardKey.Delete, self.delete_selected),
            ("sort", "Sort", None, self.sort_entries),
            ("save", "Save", QKeySequence.StandardKey.Save, self.save_file),
            ("save_as", "Save As", QKeySequence.StandardKey.SaveAs, self.save_file_as),
        ):
            action = QAction(text, self)
            if shortcut is not None:
                action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(callback)
            toolbar.addAction(action)
            self.toolbar_actions[name] = action

        self.toolbar_actions["add"].setToolTip("Append a new key/value entry")
        self.toolbar_actions["sort"].setToolTip("Sort by KEY")

        file_menu = self.menuBar().addMenu("File")
        for name in ("new", "open"):
            file_menu.addAction(self.toolbar_actions[name])
        self.recent_files_menu.setObjectName("recent_files_menu")
        self.recent_files_menu.aboutToShow.connect(self.update_recent_files_menu)
        file_menu.addMenu(self.recent_files_menu)
        file_menu.addSeparator()
        for name in ("save", "save_as"):
            file_menu.addAction(self.toolbar_actions[name])
        self.update_recent_files_menu()

        self.statusBar().addPermanentWidget(self.status_label)

    # ---- 操作 ----

    def start(self, path: Optional[str] = None) -> None:
        """起動時のファイルを読み込む"""
        self._run_guarded(self.controller.start(path))

    def new_document(self) -> None:
        self._run_guarded(self.controller.request_new())

    def open_file(self) -> None:
        self._run_guarded(self.controller.request_open())

    def load_file(self, path: str) -> None:
        self._run_guarded(self.controller.request_load_path(path))

    def open_recent_file(self, path: str) -> None:
        self._run_guarded(self.controller.request_open_recent(path))
        self.update_recent_files_menu()

    def update_recent_files_menu(self) -> None:
        """最近使用したファイルメニューを更新する"""
        self.recent_files_menu.clear()
        self.recent_file_actions.clear()

        recent_files = self.config.get_recent_files()
        if not recent_files:
            no_files_action = QAction("No recent files", self)
            no_files_action.setEnabled(False)
            self.recent_files_menu.addAction(no_files_action)
            return

        for filepath in recent_files:
            action = QAction(Path(filepath).name, self)
            action.setData(filepath)
            action.setStatusTip(filepath)
            action.triggered.connect(
                lambda checked=False, path=filepath: self.open_recent_file(path)
            )
            self.recent_files_menu.addAction(action)
            self.recent_file_actions.append(action)

        self.recent_files_menu.addSeparator()
        clear_action = QAction("Clear History", self)
        clear_action.triggered.connect(self._clear_recent_files)
        self.recent_files_menu.addAction(clear_action)

    def _clear_recent_files(self) -> None:
        self.config.clear_recent_files()
        self.update_recent_files_menu()

    def save_file(self) -> bool:
        return run_async(self.controller.save())

    def save_file_as(self) -> bool:
        return run_async(self.controller.save_as())

    def add_entry(self) -> None:
        self.controller.add_entry()
        self.table.scrollToBottom()

    def delete_selected(self) -> None:
        for entry_id in self.table.selected_entry_ids():
            self.controller.remove_entry(entry_id)

    def sort_entries(self) -> None:
        self.controller.sort_entries()

    def _run_guarded(self, coro: Coroutine[Any, Any, Any]) -> None:
        """破棄を伴う操作を実行し、必要なら確認ダイアログを表示する"""
        run_async(coro)
        if not self.controller.awaiting_confirmation:
            return
        if dialogs.confirm_discard(self):
            run_async(self.controller.confirm_pending())
        else:
            self.controller.cancel_pending()

    # ---- 表示の更新 ----

    def _on_document_changed(self) -> None:
        self.table.refresh()
        self._update_status()

    def _update_status(self) -> None:
        status = self.controller.status
        self.status_label.setText(status.text)

        name = Path(status.file_path).name if status.file_path else "Untitled"
        marker = "*" if status.dirty else ""
        self.setWindowTitle(f"{APP_TITLE} - {name}{marker}")

        save_action = self.toolbar_actions["save"]
        save_action.setEnabled(self.controller.can_save)
        if status.invalid_count:
            save_action.setToolTip("Fix invalid/empty/duplicate keys first")
        elif status.file_path is None:
            save_action.setToolTip("Save - will prompt Save As")
        else:
            save_action.setToolTip("Save")
        self.toolbar_actions["save_as"].setEnabled(self.controller.can_save)

    def _on_busy_changed(self, state: Optional[BusyState]) -> None:
        for action in self.toolbar_actions.values():
            action.setEnabled(state is None)
        self.recent_files_menu.setEnabled(state is None)
        self.table.setEnabled(state is None)
        if state is not None:
            QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
            # 同期実行中も待機表示が描画されるようにする
            QApplication.processEvents()
        else:
            QApplication.restoreOverrideCursor()
            self._update_status()

    def _show_notification(self, message: str, severity: Severity) -> None:
        if severity == Severity.ERROR:
            logger.error(f"通知: {message}")
        self.statusBar().showMessage(message, MESSAGE_TIMEOUT[severity])

    def closeEvent(self, event: QEvent) -> None:
        """ウィンドウが閉じられるときの処理

        Args:
            event: イベント
        """
        if self.controller.store.dirty and not dialogs.confirm_discard(self):
            event.ignore()
            return

        self.config.set("ui.window_size", [self.width(), self.height()])
        self.config.set(
            "ui.column_widths",
            {
                "key": self.table.columnWidth(KEY_COLUMN),
                "value": self.table.columnWidth(VALUE_COLUMN),
            },
        )
        event.accept()
