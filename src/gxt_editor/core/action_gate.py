"""未保存変更の確認ゲート

新規作成・ファイルを開く・パス指定の読み込みは現在の編集内容を破棄するため、
未保存の変更がある場合は確認が済むまで操作を保留します。

状態遷移:
- IDLE + 要求（変更なし） -> すぐに実行、IDLEのまま
- IDLE + 要求（変更あり） -> 操作を保留し、AWAITING_CONFIRMATIONへ
- AWAITING_CONFIRMATION + cancel -> 保留操作を破棄し、IDLEへ
- AWAITING_CONFIRMATION + confirm -> 保留操作を取り出して実行し、IDLEへ

保留できる操作は常に1つで、確認待ち中の新しい要求は保留操作を置き換えます。
保存と名前を付けて保存はこのゲートを通りません。
"""

import logging
from enum import Enum
from typing import Callable, Optional

from gxt_editor.models.action import PendingAction
from gxt_editor.types import ActionExecutor

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    """ゲートの状態"""

    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"


class ActionGate:
    """破棄を伴う操作の確認ゲート"""

    def __init__(
        self,
        is_dirty: Callable[[], bool],
        execute: ActionExecutor,
        on_confirmation_required: Optional[Callable[[PendingAction], None]] = None,
    ) -> None:
        """初期化

        Args:
            is_dirty: 未保存の変更があるかどうかを返す関数
            execute: 操作を実行するコルーチン関数
            on_confirmation_required: 確認が必要になったときのコールバック
        """
        self._is_dirty = is_dirty
        self._execute = execute
        self._on_confirmation_required = on_confirmation_required
        self._pending: Optional[PendingAction] = None

    @property
    def state(self) -> GateState:
        if self._pending is None:
            return GateState.IDLE
        return GateState.AWAITING_CONFIRMATION

    @property
    def pending(self) -> Optional[PendingAction]:
        """保留中の操作"""
        return self._pending

    async def request(self, action: PendingAction) -> bool:
        """操作を要求する

        Args:
            action: 要求する操作

        Returns:
            すぐに実行した場合はTrue、確認待ちで保留した場合はFalse
        """
        if not self._is_dirty():
            self._pending = None
            logger.debug(f"操作を実行します: {action.kind.value}")
            await self._execute(action)
            return True

        if self._pending is not None:
            logger.debug(
                f"保留中の操作を置き換えます: {self._pending.kind.value} -> {action.kind.value}"
            )
        self._pending = action
        logger.debug(f"未保存の変更があるため操作を保留しました: {action.kind.value}")
        if self._on_confirmation_required is not None:
            self._on_confirmation_required(action)
        return False

    async def confirm(self) -> bool:
        """変更の破棄を確認し、保留中の操作を実行する

        Returns:
            保留中の操作を実行した場合はTrue
        """
        action = self._pending
        if action is None:
            logger.warning("確認されましたが保留中の操作がありません")
            return False

        self._pending = None
        logger.debug(f"保留中の操作を実行します: {action.kind.value}")
        await self._execute(action)
        return True

    def cancel(self) -> Optional[PendingAction]:
        """保留中の操作を破棄する

        Returns:
            破棄した操作（保留がなければNone）
        """
        action = self._pending
        self._pending = None
        if action is not None:
            logger.debug(f"保留中の操作を取り消しました: {action.kind.value}")
        return action
