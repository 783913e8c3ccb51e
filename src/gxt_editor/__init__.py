"""GXTエディタ"""

from gxt_editor.core import (
    ActionGate,
    DocumentStore,
    EditorController,
    GxtService,
    PersistenceAdapter,
    ValidationReport,
    normalize_key,
    validate_entries,
)
from gxt_editor.models import GxtDocument, GxtEntry, SaveResult

__version__ = "0.1.0"

__all__ = [
    "ActionGate",
    "DocumentStore",
    "EditorController",
    "GxtDocument",
    "GxtEntry",
    "GxtService",
    "PersistenceAdapter",
    "SaveResult",
    "ValidationReport",
    "normalize_key",
    "validate_entries",
]
