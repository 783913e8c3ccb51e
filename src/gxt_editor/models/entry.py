"""GXTエントリとドキュメントのモデル"""

from typing import List, NewType, Optional

from pydantic import BaseModel, ConfigDict, Field

# エントリのハンドル（ストア内で単調増加し、再利用されない）
EntryId = NewType("EntryId", int)


class GxtEntry(BaseModel):
    """ロード/セーブサービスとやり取りするエントリ

    KEYの検証は行いません。読み込んだファイルには不正なKEYが含まれる可能性があります。
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field("", description="KEY")
    value: str = Field("", description="VALUE（複数行可）")


class Entry(BaseModel):
    """編集中のエントリ"""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., description="エントリのハンドル（永続化されない）")
    key: str = ""
    value: str = ""

    def to_wire(self) -> GxtEntry:
        """サービスに送る形式に変換する（ハンドルは含めない）"""
        return GxtEntry(key=self.key, value=self.value)


class GxtDocument(BaseModel):
    """ロード/セーブサービスとやり取りするドキュメント"""

    path: Optional[str] = Field(None, description="ファイルパス（新規ドキュメントはNone）")
    entries: List[GxtEntry] = Field(default_factory=list)


class SaveResult(BaseModel):
    """セーブ結果"""

    path: Optional[str] = Field(None, description="サービスが確定したファイルパス")
