"""設定モジュール

このモジュールは、アプリケーションの設定を管理します。
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# 最近使用したファイルの最大数
MAX_RECENT_FILES = 10

# デフォルト設定
DEFAULT_CONFIG: Dict[str, Any] = {
    # 使用するGXTロード/セーブサービス（"memory" または "module:attribute"）
    "gxt_service": "memory",
    # ログの設定
    "logging": {
        "level": "INFO",
        # 設定ディレクトリにログファイルを出力するかどうか
        "file": True,
    },
    # UIの設定
    "ui": {
        # テーブルの列幅
        "column_widths": {
            "key": 140,
            "value": 520,
        },
        # ウィンドウサイズ
        "window_size": [900, 600],
    },
    # 最近使用したファイル
    "recent_files": [],
}


def get_config_dir() -> Path:
    """設定ディレクトリのパスを取得"""
    home_dir = Path.home()

    # プラットフォームに応じた設定ディレクトリ
    if os.name == "nt":  # Windows
        return home_dir / "AppData" / "Roaming" / "gxt_editor"
    return home_dir / ".config" / "gxt_editor"


class Config:
    """設定クラス"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """初期化

        Args:
            config_path: 設定ファイルのパス（省略時はユーザーの設定ディレクトリ）
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._config_path = (
            Path(config_path) if config_path else get_config_dir() / "config.json"
        )
        self._load_config()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_config(self) -> None:
        """設定ファイルを読み込む"""
        if not self._config_path.exists():
            logger.info(
                f"設定ファイルが見つかりません。デフォルト設定を使用します: {self._config_path}"
            )
            self._save_config()
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded_config = json.load(f)

            # 読み込んだ設定をデフォルト設定にマージ
            if isinstance(loaded_config, dict):
                self._merge_config(self._config, loaded_config)
                logger.info(f"設定ファイルを読み込みました: {self._config_path}")
            else:
                logger.warning(f"設定ファイルの形式が不正です: {self._config_path}")
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"設定ファイルの読み込みに失敗しました: {e}")

    def _save_config(self) -> None:
        """設定ファイルを保存する"""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=4, ensure_ascii=False)

            logger.debug(f"設定ファイルを保存しました: {self._config_path}")
        except OSError as e:
            logger.error(f"設定ファイルの保存に失敗しました: {e}")

    def _merge_config(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """設定を再帰的にマージする

        Args:
            target: マージ先の辞書
            source: マージ元の辞書
        """
        for key, value in source.items():
            if (
                key in target
                and isinstance(target[key], dict)
                and isinstance(value, dict)
            ):
                # 両方が辞書の場合は再帰的にマージ
                self._merge_config(target[key], value)
            else:
                # それ以外の場合は上書き
                target[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """設定値を取得する

        Args:
            key: 設定キー（ドット区切りで階層指定可能）
            default: デフォルト値

        Returns:
            設定値
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """設定値を設定して保存する

        Args:
            key: 設定キー（ドット区切りで階層指定可能）
            value: 設定値
        """
        keys = key.split(".")
        target = self._config

        # 最後のキー以外を処理
        for k in keys[:-1]:
            if not isinstance(target.get(k), dict):
                target[k] = {}
            target = target[k]

        target[keys[-1]] = value
        self._save_config()

    def get_recent_files(self) -> List[str]:
        """最近使用したファイルのリストを取得"""
        return [str(f) for f in self.get("recent_files", [])]

    def add_recent_file(self, file_path: str) -> None:
        """最近使用したファイルを先頭に追加する

        Args:
            file_path: ファイルパス
        """
        recent_files = self.get_recent_files()

        # 既に存在する場合は削除して先頭に追加
        if file_path in recent_files:
            recent_files.remove(file_path)
        recent_files.insert(0, file_path)

        self.set("recent_files", recent_files[:MAX_RECENT_FILES])

    def clear_recent_files(self) -> None:
        """最近使用したファイルの履歴をクリア"""
        self.set("recent_files", [])


# シングルトンインスタンス
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """設定インスタンスを取得する

    Returns:
        Config: 設定インスタンス
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = Config()

    return _config_instance


def set_config(config: Optional[Config]) -> None:
    """設定インスタンスを差し替える（Noneで次回のget_configで再生成）"""
    global _config_instance
    _config_instance = config
