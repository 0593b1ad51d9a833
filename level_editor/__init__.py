"""
Level Editor: editing core for 2D side-scrolling levels.
"""

from .config import EditorConfig
from .document_io import MalformedDocumentError
from .models import LevelDocument, Material, ObjectKind, Tool
from .session import EditSession

__all__ = [
    "EditorConfig",
    "EditSession",
    "LevelDocument",
    "MalformedDocumentError",
    "Material",
    "ObjectKind",
    "Tool",
]
