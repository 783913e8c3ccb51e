"""GXTロード/セーブサービスの抽象インターフェース

このモジュールは、.gxtファイルの読み書きを担当する外部サービスの抽象クラスを提供します。
バイナリ形式の解析と生成はサービス側の責務で、エディタはこのインターフェースにのみ依存します。
"""

import abc
import sys
from typing import Optional, Sequence

from gxt_editor.core.constants import GXT_FILE_SUFFIX
from gxt_editor.models.entry import GxtDocument, SaveResult


class GxtService(abc.ABC):
    """GXTロード/セーブサービスの抽象クラス"""

    @abc.abstractmethod
    async def load(self, path: str) -> GxtDocument:
        """パスからドキュメントを読み込む

        Args:
            path: 読み込むファイルのパス

        Returns:
            GxtDocument: 読み込んだドキュメント（エントリはファイル内の順序）
        """
        pass

    @abc.abstractmethod
    async def save(self, document: GxtDocument) -> SaveResult:
        """ドキュメントをdocument.pathに保存する

        Args:
            document: 保存するドキュメント

        Returns:
            SaveResult: 保存結果（サービスが確定したパス）
        """
        pass

    def startup_path(self, argv: Optional[Sequence[str]] = None) -> Optional[str]:
        """ファイル関連付けで起動されたときのパスを返す

        Args:
            argv: コマンドライン引数（省略時はsys.argv）

        Returns:
            最初の引数が.gxtファイルならそのパス、それ以外はNone
        """
        args = list(sys.argv if argv is None else argv)[1:]
        if not args:
            return None
        path = args[0]
        if path.lower().endswith(GXT_FILE_SUFFIX):
            return path
        return None
