"""ドキュメントストア

このモジュールは、編集中のGXTドキュメント（ファイルパス、エントリ列、未保存フラグ）を保持します。
ドキュメントと未保存フラグはこのクラスの操作を通してのみ変更されます。

主な機能:
1. ドキュメントの置き換え: 読み込み・保存・新規作成後に呼ばれ、未保存フラグをクリア
2. エントリの編集: 追加・部分更新・削除・KEY順ソート。いずれも未保存フラグを立てる
3. 検証結果の再計算: 変更のたびにValidatorでエントリ列全体を再検証し、リスナーに通知
"""

import itertools
import logging
from typing import Iterable, List, Optional, Tuple, Union

from gxt_editor.core.key_normalizer import key_sort_key
from gxt_editor.core.validator import ValidationReport, validate_entries
from gxt_editor.models.entry import Entry, EntryId, GxtDocument, GxtEntry
from gxt_editor.types import ChangeListener, EntryPatchDict

logger = logging.getLogger(__name__)

# update_entryで変更できるフィールド
_PATCHABLE_FIELDS = frozenset(EntryPatchDict.__annotations__)

# to_documentでパスを指定しなかったことを表す
_CURRENT_PATH = object()


class DocumentStore:
    """編集中のドキュメントを保持するクラス"""

    def __init__(self) -> None:
        self._path: Optional[str] = None
        self._entries: List[Entry] = []
        self._dirty = False
        self._revision = 0
        self._ids = itertools.count(1)
        self._validation: ValidationReport = validate_entries([])
        self._listeners: List[ChangeListener] = []

    @property
    def path(self) -> Optional[str]:
        """現在のファイルパス（未保存の新規ドキュメントはNone）"""
        return self._path

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """エントリ列のコピー"""
        return tuple(entry.model_copy() for entry in self._entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    @property
    def dirty(self) -> bool:
        """前回の読み込み/保存以降に変更があるかどうか"""
        return self._dirty

    @property
    def revision(self) -> int:
        """変更のたびに増える番号（保存中の変更の検出に使用）"""
        return self._revision

    @property
    def validation(self) -> ValidationReport:
        """最新の検証結果"""
        return self._validation

    @property
    def has_validation_error(self) -> bool:
        return self._validation.has_validation_error

    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """ハンドルに対応するエントリのコピーを取得する"""
        index = self._index_of(entry_id)
        if index is None:
            return None
        return self._entries[index].model_copy()

    def add_listener(self, listener: ChangeListener) -> None:
        """変更通知のリスナーを登録する"""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def replace_document(
        self, path: Optional[str], entries: Iterable[Union[GxtEntry, Entry]] = ()
    ) -> None:
        """ドキュメント全体を置き換え、未保存フラグをクリアする

        読み込み後、保存後（保存先パスの反映）、新規作成時に使用します。

        Args:
            path: ファイルパス（新規ドキュメントはNone）
            entries: エントリ列。GxtEntryには新しいハンドルを割り当て、
                Entryはハンドルをそのまま引き継ぐ
        """
        new_entries: List[Entry] = []
        for item in entries:
            if isinstance(item, Entry):
                new_entries.append(item.model_copy())
            else:
                new_entries.append(self._new_entry(item.key, item.value))

        self._path = path
        self._entries = new_entries
        logger.debug(f"ドキュメントを置き換えました: path={path}, entries={len(new_entries)}")
        self._changed(dirty=False)

    def update_entry(self, entry_id: int, **patch: str) -> bool:
        """エントリに部分的な変更をマージする

        Args:
            entry_id: エントリのハンドル
            **patch: 変更するフィールド（key, value）

        Returns:
            エントリが見つかって更新した場合はTrue
        """
        unknown = set(patch) - _PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"更新できないフィールドです: {sorted(unknown)}")

        index = self._index_of(entry_id)
        if index is None:
            logger.warning(f"更新対象のエントリが見つかりません: id={entry_id}")
            return False

        self._entries[index] = self._entries[index].model_copy(update=patch)
        self._changed(dirty=True)
        return True

    def append_entry(self) -> EntryId:
        """空のエントリを末尾に追加する

        Returns:
            追加したエントリのハンドル
        """
        entry = self._new_entry("", "")
        self._entries.append(entry)
        logger.debug(f"エントリを追加しました: id={entry.id}")
        self._changed(dirty=True)
        return EntryId(entry.id)

    def remove_entry(self, entry_id: int) -> bool:
        """エントリを削除する

        Returns:
            エントリが見つかって削除した場合はTrue
        """
        index = self._index_of(entry_id)
        if index is None:
            logger.warning(f"削除対象のエントリが見つかりません: id={entry_id}")
            return False

        del self._entries[index]
        logger.debug(f"エントリを削除しました: id={entry_id}")
        self._changed(dirty=True)
        return True

    def sort_by_key(self) -> None:
        """KEYのバイト順（昇順）でエントリを並べ替える

        すでに並んでいる場合も未保存フラグを立てます。
        """
        self._entries.sort(key=lambda entry: key_sort_key(entry.key))
        self._changed(dirty=True)

    def mark_saved(self, path: Optional[str], revision: int) -> bool:
        """保存結果のパスを反映する

        保存したスナップショットの後に変更がなければ未保存フラグをクリアします。
        保存中に変更された場合は、その変更が保存されていないため未保存のままにします。

        Args:
            path: 保存後のパス
            revision: 保存したスナップショットのrevision

        Returns:
            未保存フラグをクリアした場合はTrue
        """
        clean = revision == self._revision
        self._path = path
        if not clean:
            logger.warning(
                f"保存中にドキュメントが変更されました: revision {revision} -> {self._revision}"
            )
        self._changed(dirty=not clean)
        return clean

    def to_document(self, path=_CURRENT_PATH) -> GxtDocument:
        """サービスに送るドキュメントを作成する（ハンドルは含めない）

        Args:
            path: 保存先のパス（省略時は現在のパス）
        """
        if path is _CURRENT_PATH:
            path = self._path
        return GxtDocument(
            path=path, entries=[entry.to_wire() for entry in self._entries]
        )

    def _new_entry(self, key: str, value: str) -> Entry:
        return Entry(id=next(self._ids), key=key, value=value)

    def _index_of(self, entry_id: int) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def _changed(self, dirty: bool) -> None:
        """検証結果を再計算し、未保存フラグを更新してリスナーに通知する"""
        self._revision += 1
        self._validation = validate_entries(self._entries)
        self._dirty = dirty
        for listener in list(self._listeners):
            listener()
