"""インメモリのGXTロード/セーブサービス

プロセス内の辞書にドキュメントを保持するサービスです。
既定のサービスとして、またテストで使用します。
"""

import logging
from typing import Dict, Iterable, List, Optional

from gxt_editor.core.errors import GxtServiceError
from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.validator import check_key, find_duplicate_keys
from gxt_editor.models.entry import GxtDocument, GxtEntry, SaveResult

logger = logging.getLogger(__name__)


class InMemoryGxtService(GxtService):
    """辞書にドキュメントを保持するサービス"""

    def __init__(self, documents: Optional[Dict[str, Iterable[GxtEntry]]] = None):
        """初期化

        Args:
            documents: 初期ドキュメント（パス -> エントリ列）
        """
        self._documents: Dict[str, List[GxtEntry]] = {}
        for path, entries in (documents or {}).items():
            self.put(path, entries)

    def put(self, path: str, entries: Iterable[GxtEntry]) -> None:
        """ドキュメントを直接登録する（検証しない）"""
        self._documents[path] = list(entries)

    def get(self, path: str) -> Optional[List[GxtEntry]]:
        """登録されているエントリ列を取得する"""
        entries = self._documents.get(path)
        return list(entries) if entries is not None else None

    def paths(self) -> List[str]:
        return sorted(self._documents)

    async def load(self, path: str) -> GxtDocument:
        if path not in self._documents:
            raise GxtServiceError(f"Read file failed: {path}: no such document")
        logger.debug(f"インメモリドキュメントを読み込みます: {path}")
        return GxtDocument(path=path, entries=list(self._documents[path]))

    async def save(self, document: GxtDocument) -> SaveResult:
        if not document.path:
            raise GxtServiceError(
                "No file_path in doc. Use Save As to choose a path first."
            )
        self._validate(document.entries)
        self._documents[document.path] = list(document.entries)
        logger.debug(
            f"インメモリドキュメントを保存しました: {document.path} ({len(document.entries)}件)"
        )
        return SaveResult(path=document.path)

    def _validate(self, entries: List[GxtEntry]) -> None:
        """保存前にKEYを検証する"""
        duplicates = find_duplicate_keys(entry.key for entry in entries)
        for entry in entries:
            issues = check_key(entry.key, duplicates)
            if issues:
                reasons = ", ".join(issue.value for issue in issues)
                raise GxtServiceError(f"Invalid KEY {entry.key!r}: {reasons}")
