"""KEY正規化モジュール

入力テキストを有効なKEY候補（可視ASCIIのみ、最大8バイト）に変換します。
KEY編集のたびに適用されるため、編集経由で格納されるKEYは常に正規化済みです。
"""

import re

from gxt_editor.core.constants import (
    KEY_MAX_LENGTH,
    PRINTABLE_ASCII_MAX,
    PRINTABLE_ASCII_MIN,
)

# 可視ASCII（0x20-0x7E）以外の文字
_NON_PRINTABLE_ASCII = re.compile(
    f"[^{re.escape(chr(PRINTABLE_ASCII_MIN))}-{re.escape(chr(PRINTABLE_ASCII_MAX))}]"
)


def normalize_key(text: str) -> str:
    """入力テキストをKEY候補に正規化する

    可視ASCII以外の文字を取り除き、先頭から8文字に切り詰めます。
    例外は発生せず、結果が空文字列になる場合もあります。

    Args:
        text: 入力テキスト

    Returns:
        正規化されたKEY
    """
    if not text:
        return ""
    return _NON_PRINTABLE_ASCII.sub("", text)[:KEY_MAX_LENGTH]


def is_normalized_key(key: str) -> bool:
    """KEYが正規化済みかどうか"""
    return key == normalize_key(key)


def key_sort_key(key: str) -> bytes:
    """バイト順比較用のソートキーを返す

    bytesの比較は共通部分をバイト単位で比較し、一致した場合は短い方が先になります。
    """
    return key.encode("utf-8", "surrogatepass")


def compare_keys(a: str, b: str) -> int:
    """2つのKEYをバイト順で比較する

    Returns:
        a < b なら負、等しければ0、a > b なら正
    """
    ka = key_sort_key(a or "")
    kb = key_sort_key(b or "")
    return (ka > kb) - (ka < kb)
