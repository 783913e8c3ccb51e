"""GXTサービスファクトリを提供するモジュール

このモジュールは、設定に基づいてロード/セーブサービスを返す関数を提供します。
サービスは "memory" か、"module:attribute" 形式のインポート参照で指定します。
"""

import importlib
import logging
from enum import Enum
from typing import Dict, Optional

from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.memory_service import InMemoryGxtService

logger = logging.getLogger(__name__)


class ServiceType(str, Enum):
    """組み込みサービスの種類"""

    MEMORY = "memory"


# デフォルトのサービス
DEFAULT_SERVICE = ServiceType.MEMORY.value

# サービスのインスタンス（名前ごと）
_service_instances: Dict[str, GxtService] = {}


def get_gxt_service(name: Optional[str] = None) -> GxtService:
    """GXTサービスを取得する

    Args:
        name: サービス名。Noneの場合は設定ファイルの値を使用

    Returns:
        GxtService: サービスのインスタンス

    Raises:
        ValueError: 不明なサービス名の場合
        TypeError: 参照先がGxtServiceを返さない場合
    """
    if name is None:
        name = _get_default_service_from_config()

    if name not in _service_instances:
        _service_instances[name] = _create_service(name)
        logger.info(f"GXTサービスを作成しました: {name}")

    return _service_instances[name]


def reset_services() -> None:
    """キャッシュしているサービスを破棄する"""
    _service_instances.clear()


def _create_service(name: str) -> GxtService:
    if name == ServiceType.MEMORY:
        return InMemoryGxtService()

    if ":" not in name:
        raise ValueError(f"不明なGXTサービス: {name}")

    module_name, _, attr_name = name.partition(":")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr_name)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"GXTサービスを読み込めません: {name}: {e}") from e

    service = factory() if callable(factory) else factory
    if not isinstance(service, GxtService):
        raise TypeError(f"GxtServiceではありません: {name} -> {type(service).__name__}")
    return service


def _get_default_service_from_config() -> str:
    """設定ファイルからデフォルトのサービス名を取得する"""
    try:
        from gxt_editor.config import get_config

        name = get_config().get("gxt_service", DEFAULT_SERVICE)
        if isinstance(name, str) and name:
            return name
        logger.warning(f"不正なGXTサービス指定: {name!r}、デフォルトを使用します")
    except Exception as e:
        logger.warning(
            f"設定ファイルからGXTサービスを取得できませんでした: {e}、デフォルトを使用します"
        )
    return DEFAULT_SERVICE
