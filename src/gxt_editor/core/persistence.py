"""ロード/セーブサービスとドキュメントストアの変換アダプタ

外部サービスを呼び出すのはこのクラスだけです。
失敗した場合はドキュメントストアを変更せず、LoadError/SaveErrorを送出します。
"""

import logging
from typing import Optional

from gxt_editor.core.document_store import DocumentStore
from gxt_editor.core.errors import LoadError, SaveError
from gxt_editor.core.gxt_interface import GxtService

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """サービスのドキュメント形式と編集中の形式を相互に変換するクラス"""

    def __init__(self, service: GxtService, store: DocumentStore) -> None:
        self.service = service
        self.store = store

    async def load(self, path: str) -> None:
        """ドキュメントを読み込み、ストアを置き換える

        エントリには新しいハンドルを割り当て、順序は受け取ったまま保持します。

        Args:
            path: 読み込むファイルのパス

        Raises:
            LoadError: サービスが失敗した場合（ストアは変更されない）
        """
        logger.info(f"GXTファイルを読み込みます: {path}")
        try:
            document = await self.service.load(path)
        except Exception as e:
            logger.error(f"GXTファイルの読み込みに失敗しました: {path}: {e}")
            raise LoadError(path, str(e)) from e

        resolved = document.path if document.path is not None else path
        self.store.replace_document(resolved, document.entries)
        logger.info(f"GXTファイルを読み込みました: {resolved} ({len(document.entries)}件)")

    async def save(self, path: Optional[str]) -> str:
        """現在のドキュメントを保存する

        サービスに送るGxtDocumentは、指定したパスとストアのエントリ列から作成します。
        そのため引数はドキュメントではなく保存先のパスです。
        KEYの検証は呼び出し側の責務で、ここでは再検証しません。
        保存中にストアが変更された場合、パスは反映しますが未保存フラグは残ります。

        Args:
            path: 保存先のパス

        Returns:
            保存後のパス（サービスが返したパスを優先）

        Raises:
            SaveError: 保存先が未決定、またはサービスが失敗した場合（ストアは変更されない）
        """
        if not path:
            raise SaveError(None, "No file path. Use Save As to choose a path first.")

        revision = self.store.revision
        document = self.store.to_document(path)
        logger.info(f"GXTファイルを保存します: {path} ({len(document.entries)}件)")
        try:
            result = await self.service.save(document)
        except Exception as e:
            logger.error(f"GXTファイルの保存に失敗しました: {path}: {e}")
            raise SaveError(path, str(e)) from e

        saved_path = result.path or path
        if self.store.mark_saved(saved_path, revision):
            logger.info(f"GXTファイルを保存しました: {saved_path}")
        else:
            logger.info(f"GXTファイルを保存しました（保存後の変更は未保存）: {saved_path}")
        return saved_path
