"""ステータス表示のデータモデル"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from gxt_editor.core.constants import BusyState, Messages


class StatusModel(BaseModel):
    """ステータス行のデータモデル"""

    model_config = ConfigDict(frozen=True)

    file_path: Optional[str] = Field(None, description="現在のファイルパス")
    entry_count: int = Field(0, description="エントリ数")
    dirty: bool = Field(False, description="未保存の変更があるかどうか")
    invalid_count: int = Field(0, description="検証エラーのあるエントリ数")
    busy: Optional[BusyState] = Field(None, description="ロード/セーブ中の状態")

    @computed_field
    @property
    def text(self) -> str:
        """ステータス行の文字列"""
        noun = "entry" if self.entry_count == 1 else "entries"
        base = f"{self.file_path or Messages.NO_FILE} · {self.entry_count} {noun}"
        if self.dirty:
            return f"{base} · {Messages.UNSAVED}"
        return base

    def __getitem__(self, key: str) -> object:
        """辞書形式でのアクセスをサポート"""
        return getattr(self, key)
