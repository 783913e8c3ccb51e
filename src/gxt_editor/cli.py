"""コマンドラインインターフェース"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Union

from gxt_editor.config import Config, get_config, set_config
from gxt_editor.core.document_store import DocumentStore
from gxt_editor.core.errors import LoadError
from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.persistence import PersistenceAdapter
from gxt_editor.core.service_factory import get_gxt_service

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# --check の終了コード
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gxt-editor", description="GXTエディタ")
    parser.add_argument("file", nargs="?", help="開くGXTファイルのパス")
    parser.add_argument("--config", help="設定ファイルのパス")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="ログレベル（省略時は設定ファイルの値）",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="GUIを起動せずにファイルのKEYを検証する",
    )
    return parser


def setup_logging(level: Union[str, int], log_file: Optional[Path] = None) -> None:
    """ロギングを設定する

    Args:
        level: ログレベル
        log_file: ログファイルのパス（Noneの場合は標準出力のみ）
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def check_file(path: str, service: GxtService) -> int:
    """ファイルを読み込み、KEYの検証結果を表示する

    Returns:
        終了コード（0: 問題なし、1: 検証エラーあり、2: 読み込み失敗）
    """
    store = DocumentStore()
    try:
        asyncio.run(PersistenceAdapter(service, store).load(path))
    except LoadError as e:
        print(f"エラー: {e.reason}")
        return EXIT_LOAD_FAILED

    report = store.validation
    print(f"ファイル: {store.path}")
    print(f"エントリ数: {store.entry_count}")
    print(f"検証エラー: {report.invalid_count}")
    for index, entry in enumerate(store.entries, start=1):
        messages = report.messages_for(entry.id)
        if messages:
            print(f"  #{index} {entry.key!r}: {', '.join(messages)}")

    return EXIT_INVALID if report.has_validation_error else EXIT_OK


def run_gui(path: Optional[str], config: Config) -> int:
    """GUIアプリケーションを起動する"""
    from PySide6.QtWidgets import QApplication

    from gxt_editor.gui import MainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("GXT Editor")

    window = MainWindow(config=config)
    window.show()
    window.start(path)
    return app.exec()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """コマンドラインインターフェースのエントリポイント"""
    args = build_parser().parse_args(argv)

    config = Config(args.config) if args.config else get_config()
    set_config(config)

    log_file = config.path.parent / "gxt_editor.log" if config.get("logging.file") else None
    setup_logging(args.log_level or config.get("logging.level", "INFO"), log_file)

    if args.check:
        if not args.file:
            print("エラー: --check にはファイルのパスが必要です")
            return EXIT_LOAD_FAILED
        return check_file(args.file, get_gxt_service(config.get("gxt_service")))

    return run_gui(args.file, config)


if __name__ == "__main__":
    sys.exit(main())
