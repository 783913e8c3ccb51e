"""pytestの設定ファイル

このファイルはpytestの実行時に自動的に読み込まれ、
テスト環境のセットアップやフィクスチャの定義を行います。
"""

import gc
import os
from typing import Callable, List, Tuple
from unittest.mock import MagicMock

# ウィンドウを表示せずにQtを動かす
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6 import QtWidgets

from gxt_editor.config import Config, set_config
from gxt_editor.core.document_store import DocumentStore
from gxt_editor.core.editor_controller import EditorController
from gxt_editor.core.memory_service import InMemoryGxtService
from gxt_editor.core.service_factory import reset_services
from gxt_editor.models.entry import GxtEntry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """テストごとに一時ディレクトリの設定ファイルを使うフィクスチャ"""
    config = Config(tmp_path / "config" / "config.json")
    set_config(config)
    yield config
    set_config(None)
    reset_services()


@pytest.fixture
def make_entries() -> Callable[..., List[GxtEntry]]:
    """(KEY, VALUE) のタプルからGxtEntryのリストを作るフィクスチャ"""

    def _make(*pairs: Tuple[str, str]) -> List[GxtEntry]:
        return [GxtEntry(key=key, value=value) for key, value in pairs]

    return _make


@pytest.fixture
def memory_service(make_entries) -> InMemoryGxtService:
    """サンプルドキュメントを登録したインメモリサービス"""
    return InMemoryGxtService(
        {
            "/data/american.gxt": make_entries(
                ("INTRO", "Welcome to\nLiberty City"),
                ("CASH", "$100"),
                ("BYE", "See you"),
            ),
            "/data/broken.gxt": make_entries(
                ("A", "x"),
                ("A", "y"),
                ("", "no key"),
                ("TOOLONGKEY", "z"),
            ),
        }
    )


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def controller(memory_service, isolated_config) -> EditorController:
    """ピッカーと通知をモック化したコントローラ"""
    return EditorController(
        memory_service,
        pick_open_path=MagicMock(return_value=None),
        pick_save_path=MagicMock(return_value=None),
        notify=MagicMock(),
        config=isolated_config,
        on_busy_changed=MagicMock(),
    )


@pytest.fixture(scope="function")
def mock_qt_dialogs(monkeypatch):
    """Qt対話型ダイアログをモック化するフィクスチャ

    ファイル選択やメッセージボックスをモック化してテストの一時停止を防ぎます。
    """
    monkeypatch.setattr(
        QtWidgets.QFileDialog,
        "getOpenFileName",
        lambda *args, **kwargs: ("/data/american.gxt", "GXT (*.gxt)"),
    )
    monkeypatch.setattr(
        QtWidgets.QFileDialog,
        "getSaveFileName",
        lambda *args, **kwargs: ("/data/saved", "GXT (*.gxt)"),
    )
    monkeypatch.setattr(
        QtWidgets.QMessageBox,
        "question",
        lambda *args, **kwargs: QtWidgets.QMessageBox.StandardButton.Discard,
    )
    yield


@pytest.fixture(autouse=True, scope="function")
def reset_qt_mocks():
    """すべてのテストの後にガベージコレクションを実行するフィクスチャ"""
    yield
    gc.collect()
