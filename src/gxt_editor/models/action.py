"""保留中の操作のモデル"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gxt_editor.core.constants import ActionKind

# パスが必要な操作
_PATH_ACTIONS = frozenset({ActionKind.LOAD_PATH, ActionKind.OPEN_RECENT})


class PendingAction(BaseModel):
    """未保存変更の確認待ちで保留される操作

    再実行に必要な情報だけを保持します。
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    path: Optional[str] = Field(None, description="LOAD_PATH/OPEN_RECENTで読み込むパス")

    @model_validator(mode="after")
    def _check_path(self) -> "PendingAction":
        if self.kind in _PATH_ACTIONS and not self.path:
            raise ValueError(f"{self.kind.value}にはpathが必要です")
        return self

    @classmethod
    def open_file(cls) -> "PendingAction":
        return cls(kind=ActionKind.OPEN)

    @classmethod
    def new_document(cls) -> "PendingAction":
        return cls(kind=ActionKind.NEW)

    @classmethod
    def load_path(cls, path: str) -> "PendingAction":
        return cls(kind=ActionKind.LOAD_PATH, path=path)

    @classmethod
    def open_recent(cls, path: str) -> "PendingAction":
        return cls(kind=ActionKind.OPEN_RECENT, path=path)
