"""エラー定義モジュール

どのエラーもプロセスを終了させず、ユーザーの再試行で回復できます。
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gxt_editor.core.validator import ValidationReport


class GxtEditorError(Exception):
    """エディタのエラーの基底クラス"""


class GxtServiceError(GxtEditorError):
    """ロード/セーブサービスが報告するエラー"""


class LoadError(GxtEditorError):
    """ドキュメントの読み込みに失敗した"""

    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Load failed: {path}: {reason}")


class SaveError(GxtEditorError):
    """ドキュメントの保存に失敗した"""

    def __init__(self, path: Optional[str], reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Save failed: {path or '(no path)'}: {reason}")


class KeyValidationError(GxtEditorError):
    """KEYの検証エラーがあるため保存できない"""

    def __init__(self, report: "ValidationReport"):
        self.report = report
        super().__init__(
            f"{report.invalid_count} entries have invalid, empty or duplicate keys"
        )
