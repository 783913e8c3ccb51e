"""GXTドキュメントのコアモジュール"""

from gxt_editor.core.action_gate import ActionGate, GateState
from gxt_editor.core.document_store import DocumentStore
from gxt_editor.core.editor_controller import EditorController
from gxt_editor.core.gxt_interface import GxtService
from gxt_editor.core.key_normalizer import normalize_key
from gxt_editor.core.persistence import PersistenceAdapter
from gxt_editor.core.validator import ValidationReport, validate_entries

__all__ = [
    "ActionGate",
    "DocumentStore",
    "EditorController",
    "GateState",
    "GxtService",
    "PersistenceAdapter",
    "ValidationReport",
    "normalize_key",
    "validate_entries",
]
