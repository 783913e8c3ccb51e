"""KEY検証モジュール

エントリ列全体に対して、KEYの空・不正・重複を検査します。
検証は毎回エントリ列全体から再計算し、キャッシュは持ちません。

検査項目:
1. 空: KEYが空文字列 -> required
2. 不正: KEYが正規化結果と一致しない -> invalid（読み込んだファイル由来のKEYでのみ発生）
3. 重複: 空でないKEYが複数のエントリで一致 -> 該当するすべてのエントリが duplicate
"""

import logging
from collections import Counter
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from gxt_editor.core.constants import KEY_ISSUE_MESSAGES, KEY_MIN_LENGTH, KeyIssue
from gxt_editor.core.key_normalizer import normalize_key
from gxt_editor.models.entry import Entry

logger = logging.getLogger(__name__)


class ValidationReport(BaseModel):
    """ドキュメント全体の検証結果"""

    model_config = ConfigDict(frozen=True)

    issues: Dict[int, Tuple[KeyIssue, ...]] = Field(
        default_factory=dict, description="エントリのハンドルごとの検証エラー"
    )
    duplicate_keys: FrozenSet[str] = Field(
        default_factory=frozenset, description="重複しているKEY"
    )

    @property
    def has_validation_error(self) -> bool:
        """いずれかのエントリに検証エラーがあるかどうか"""
        return bool(self.issues)

    @property
    def invalid_count(self) -> int:
        """検証エラーのあるエントリ数"""
        return len(self.issues)

    def issues_for(self, entry_id: int) -> Tuple[KeyIssue, ...]:
        return self.issues.get(entry_id, ())

    def is_valid(self, entry_id: int) -> bool:
        return entry_id not in self.issues

    def messages_for(self, entry_id: int) -> List[str]:
        """エントリの検証エラーを表示用メッセージで返す"""
        return [KEY_ISSUE_MESSAGES[issue] for issue in self.issues_for(entry_id)]


def find_duplicate_keys(keys: Iterable[str]) -> FrozenSet[str]:
    """空でないKEYのうち、2回以上現れるものを返す"""
    counts = Counter(key for key in keys if key)
    return frozenset(key for key, count in counts.items() if count > 1)


def check_key(key: str, duplicate_keys: FrozenSet[str] = frozenset()) -> Tuple[KeyIssue, ...]:
    """1つのKEYを検査する

    Args:
        key: 検査するKEY
        duplicate_keys: ドキュメント内で重複しているKEY

    Returns:
        検証エラーのタプル（問題がなければ空）
    """
    if len(key) < KEY_MIN_LENGTH:
        return (KeyIssue.REQUIRED,)

    issues: List[KeyIssue] = []
    if key != normalize_key(key):
        issues.append(KeyIssue.INVALID)
    if key in duplicate_keys:
        issues.append(KeyIssue.DUPLICATE)
    return tuple(issues)


def validate_entries(entries: Sequence[Entry]) -> ValidationReport:
    """エントリ列全体を検証する

    Args:
        entries: 検証するエントリ列

    Returns:
        ValidationReport: 検証結果
    """
    duplicate_keys = find_duplicate_keys(entry.key for entry in entries)
    issues: Dict[int, Tuple[KeyIssue, ...]] = {}
    for entry in entries:
        entry_issues = check_key(entry.key, duplicate_keys)
        if entry_issues:
            issues[entry.id] = entry_issues

    if issues:
        logger.debug(
            f"検証エラー: {len(issues)}件 (重複KEY: {sorted(duplicate_keys)})"
        )
    return ValidationReport(issues=issues, duplicate_keys=duplicate_keys)


def has_validation_error(entries: Sequence[Entry]) -> bool:
    """エントリ列に検証エラーがあるかどうか"""
    return validate_entries(entries).has_validation_error
