"""定数定義モジュール

このモジュールは、アプリケーション全体で使用される定数を定義します。
"""

from enum import Enum

# KEYの制約（可視ASCIIのみなので文字数 = バイト数）
KEY_MIN_LENGTH = 1
KEY_MAX_LENGTH = 8
PRINTABLE_ASCII_MIN = 0x20
PRINTABLE_ASCII_MAX = 0x7E

# GXTファイルの拡張子
GXT_FILE_SUFFIX = ".gxt"
GXT_FILE_FILTER = "GXT (*.gxt)"


class KeyIssue(str, Enum):
    """KEYの検証エラー種別"""

    REQUIRED = "required"
    INVALID = "invalid"
    DUPLICATE = "duplicate"


# 検証エラーの表示メッセージ
KEY_ISSUE_MESSAGES = {
    KeyIssue.REQUIRED: "Required",
    KeyIssue.INVALID: "KEY must be printable ASCII (0x20-0x7E), length 1..8 bytes",
    KeyIssue.DUPLICATE: "Duplicate KEY",
}


class BusyState(str, Enum):
    """ロード/セーブの実行状態"""

    LOADING = "loading"
    SAVING = "saving"


class Severity(str, Enum):
    """通知の重要度"""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class ActionKind(str, Enum):
    """未保存変更の確認が必要な操作の種類"""

    OPEN = "open"
    NEW = "new"
    LOAD_PATH = "load_path"
    OPEN_RECENT = "open_recent"


# ユーザー向けメッセージ
class Messages:
    """通知メッセージの定数クラス"""

    NEW_DOCUMENT = "New document created"
    LOADED = "Loaded"
    LOADED_FROM_ASSOCIATION = "Loaded from associated file"
    LOAD_FAILED = "Load failed"
    SAVED = "Saved"
    SAVED_AS = "Saved as"
    SAVE_FAILED = "Save failed"
    SAVE_AS_FAILED = "Save As failed"
    FIX_VALIDATION_FIRST = "Fix key validation errors or duplicates first"
    NO_FILE = "No file"
    UNSAVED = "Unsaved"
