"""データモデル"""

from gxt_editor.models.action import PendingAction
from gxt_editor.models.entry import Entry, EntryId, GxtDocument, GxtEntry, SaveResult
from gxt_editor.models.status import StatusModel

__all__ = [
    "Entry",
    "EntryId",
    "GxtDocument",
    "GxtEntry",
    "PendingAction",
    "SaveResult",
    "StatusModel",
]
