"""エディタコントローラ

このモジュールは、UIから呼ばれる操作（新規・開く・保存・編集）を提供します。
UIはこのクラスを呼び出し、DocumentStoreの状態を表示するだけです。

主な機能:
1. 破棄を伴う操作: ActionGateを通し、未保存の変更があれば確認待ちにする
2. 保存: 検証エラーがあれば拒否し、パスが未決定なら名前を付けて保存に切り替える
3. ビジー状態: ロード/セーブ中は破棄を伴う操作と保存を拒否する
4. 通知: 成功と失敗をnotifyコールバックで伝える（キャンセルは通知しない）
"""

import logging
from typing import TYPE_CHECKING, Optional

from gxt_editor.core.action_gate import ActionGate, GateState
from gxt_editor.core.constants import ActionKind, BusyState, Messages, Severity
from gxt_editor.core.document_store import DocumentStore
from gxt_editor.core.errors import KeyValidationError, LoadError, SaveError
from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.key_normalizer import normalize_key
from gxt_editor.core.persistence import PersistenceAdapter
from gxt_editor.models.action import PendingAction
from gxt_editor.models.entry import EntryId
from gxt_editor.models.status import StatusModel
from gxt_editor.types import BusyCallback, NotifyCallback, OpenPathPicker, SavePathPicker

if TYPE_CHECKING:
    from gxt_editor.config import Config

logger = logging.getLogger(__name__)


class EditorController:
    """ドキュメントの編集操作をまとめるクラス"""

    def __init__(
        self,
        service: GxtService,
        pick_open_path: OpenPathPicker,
        pick_save_path: SavePathPicker,
        notify: NotifyCallback,
        store: Optional[DocumentStore] = None,
        config: Optional["Config"] = None,
        on_busy_changed: Optional[BusyCallback] = None,
    ) -> None:
        """初期化

        Args:
            service: ロード/セーブサービス
            pick_open_path: 開くファイルを選択する関数（キャンセル時はNone）
            pick_save_path: 保存先を選択する関数（キャンセル時はNone）
            notify: 通知を表示する関数
            store: ドキュメントストア（省略時は内部で生成）
            config: 設定（指定時は最近使用したファイルを記録）
            on_busy_changed: ビジー状態が変わったときのコールバック
        """
        self.store = store or DocumentStore()
        self.service = service
        self.persistence = PersistenceAdapter(service, self.store)
        self.gate = ActionGate(lambda: self.store.dirty, self._execute)
        self._pick_open_path = pick_open_path
        self._pick_save_path = pick_save_path
        self._notify = notify
        self._config = config
        self._on_busy_changed = on_busy_changed
        self._busy: Optional[BusyState] = None
        self._started = False

    @property
    def busy(self) -> Optional[BusyState]:
        """ロード/セーブ中の状態（待機中はNone）"""
        return self._busy

    @property
    def awaiting_confirmation(self) -> bool:
        """未保存変更の破棄の確認待ちかどうか"""
        return self.gate.state == GateState.AWAITING_CONFIRMATION

    @property
    def pending_action(self) -> Optional[PendingAction]:
        return self.gate.pending

    @property
    def can_save(self) -> bool:
        """保存できる状態かどうか"""
        return self._busy is None and not self.store.has_validation_error

    @property
    def status(self) -> StatusModel:
        """ステータス行の情報"""
        return StatusModel(
            file_path=self.store.path,
            entry_count=self.store.entry_count,
            dirty=self.store.dirty,
            invalid_count=self.store.validation.invalid_count,
            busy=self._busy,
        )

    # ---- 破棄を伴う操作 ----

    async def start(self, path: Optional[str] = None) -> bool:
        """起動時の読み込みを1回だけ要求する

        Args:
            path: 読み込むパス（省略時はサービスのstartup_path）

        Returns:
            読み込みを要求した場合はTrue
        """
        if self._started:
            return False
        self._started = True

        startup_path = path or self.service.startup_path()
        if not startup_path:
            return False
        logger.info(f"起動時のファイルを読み込みます: {startup_path}")
        await self.request(PendingAction.load_path(startup_path))
        return True

    async def request_open(self) -> bool:
        return await self.request(PendingAction.open_file())

    async def request_new(self) -> bool:
        return await self.request(PendingAction.new_document())

    async def request_load_path(self, path: str) -> bool:
        return await self.request(PendingAction.load_path(path))

    async def request_open_recent(self, path: str) -> bool:
        """最近使用したファイルを開く"""
        return await self.request(PendingAction.open_recent(path))

    async def request(self, action: PendingAction) -> bool:
        """破棄を伴う操作を要求する

        Returns:
            すぐに実行した場合はTrue（確認待ち、ビジーで拒否した場合はFalse）
        """
        if self._busy is not None:
            logger.info(f"処理中のため操作を拒否しました: {action.kind.value} ({self._busy.value})")
            return False
        return await self.gate.request(action)

    async def confirm_pending(self) -> bool:
        """変更を破棄して保留中の操作を実行する"""
        if self._busy is not None:
            logger.info(f"処理中のため確認を保留します: {self._busy.value}")
            return False
        return await self.gate.confirm()

    def cancel_pending(self) -> Optional[PendingAction]:
        """保留中の操作を取り消す"""
        return self.gate.cancel()

    async def _execute(self, action: PendingAction) -> None:
        if action.kind == ActionKind.NEW:
            self.store.replace_document(None, [])
            self._notify(Messages.NEW_DOCUMENT, Severity.INFO)
        elif action.kind == ActionKind.OPEN:
            path = self._pick_open_path()
            if not path:
                logger.debug("ファイル選択がキャンセルされました")
                return
            await self._load(path, Messages.LOADED)
        elif action.kind == ActionKind.LOAD_PATH:
            await self._load(action.path, Messages.LOADED_FROM_ASSOCIATION)
        elif action.kind == ActionKind.OPEN_RECENT:
            await self._load(action.path, Messages.LOADED)

    async def _load(self, path: str, success_message: str) -> bool:
        self._set_busy(BusyState.LOADING)
        try:
            await self.persistence.load(path)
        except LoadError as e:
            self._notify(e.reason or Messages.LOAD_FAILED, Severity.ERROR)
            return False
        finally:
            self._set_busy(None)

        self._remember(self.store.path)
        self._notify(success_message, Severity.SUCCESS)
        return True

    # ---- 保存 ----

    async def save(self) -> bool:
        """保存する（パスが未決定なら名前を付けて保存）

        Returns:
            保存に成功した場合はTrue
        """
        if self.store.path is None:
            return await self.save_as()
        if not self._check_savable():
            return False
        return await self._save(self.store.path, Messages.SAVED, Messages.SAVE_FAILED)

    async def save_as(self) -> bool:
        """保存先を選択して保存する

        Returns:
            保存に成功した場合はTrue（キャンセル時はFalse）
        """
        if not self._check_savable():
            return False

        path = self._pick_save_path(self.store.path)
        if not path:
            logger.debug("保存先の選択がキャンセルされました")
            return False
        return await self._save(path, Messages.SAVED_AS, Messages.SAVE_AS_FAILED)

    def _check_savable(self) -> bool:
        if self._busy is not None:
            logger.info(f"処理中のため保存を拒否しました: {self._busy.value}")
            return False
        try:
            self._ensure_valid()
        except KeyValidationError as e:
            logger.warning(f"検証エラーのため保存を拒否しました: {e}")
            self._notify(Messages.FIX_VALIDATION_FIRST, Severity.ERROR)
            return False
        return True

    def _ensure_valid(self) -> None:
        report = self.store.validation
        if report.has_validation_error:
            raise KeyValidationError(report)

    async def _save(self, path: str, success_message: str, failure_message: str) -> bool:
        self._set_busy(BusyState.SAVING)
        try:
            saved_path = await self.persistence.save(path)
        except SaveError as e:
            self._notify(e.reason or failure_message, Severity.ERROR)
            return False
        finally:
            self._set_busy(None)

        self._remember(saved_path)
        self._notify(success_message, Severity.SUCCESS)
        return True

    # ---- 編集 ----

    def edit_key(self, entry_id: int, text: str) -> str:
        """KEYを正規化して更新する

        Returns:
            格納したKEY
        """
        key = normalize_key(text)
        self.store.update_entry(entry_id, key=key)
        return key

    def edit_value(self, entry_id: int, text: str) -> None:
        self.store.update_entry(entry_id, value=text)

    def add_entry(self) -> EntryId:
        return self.store.append_entry()

    def remove_entry(self, entry_id: int) -> bool:
        return self.store.remove_entry(entry_id)

    def sort_entries(self) -> None:
        self.store.sort_by_key()

    # ---- 内部処理 ----

    def _set_busy(self, state: Optional[BusyState]) -> None:
        self._busy = state
        if self._on_busy_changed is not None:
            self._on_busy_changed(state)

    def _remember(self, path: Optional[str]) -> None:
        """最近使用したファイルに記録する"""
        if self._config is not None and path:
            self._config.add_recent_file(path)
