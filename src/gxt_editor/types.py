"""型定義モジュール

このモジュールは、アプリケーション全体で使用される共通の型エイリアスを定義します。
"""

from typing import (
    TYPE_CHECKING,
    Awaitable,
    Callable,
    Optional,
    TypeAlias,
    TypedDict,
)

if TYPE_CHECKING:
    from gxt_editor.core.constants import BusyState, Severity
    from gxt_editor.models.action import PendingAction


class EntryPatchDict(TypedDict, total=False):
    """エントリの部分更新の型定義"""

    key: str
    value: str


# ストア変更時のリスナー
ChangeListener: TypeAlias = Callable[[], None]

# 通知コールバック（メッセージ, 重要度）
NotifyCallback: TypeAlias = Callable[[str, "Severity"], None]

# 開くファイルの選択（キャンセル時はNone）
OpenPathPicker: TypeAlias = Callable[[], Optional[str]]

# 保存先の選択（引数は既定のパス、キャンセル時はNone）
SavePathPicker: TypeAlias = Callable[[Optional[str]], Optional[str]]

# 保留操作の実行
ActionExecutor: TypeAlias = Callable[["PendingAction"], Awaitable[None]]

# ビジー状態変更時のコールバック
BusyCallback: TypeAlias = Callable[[Optional["BusyState"]], None]
