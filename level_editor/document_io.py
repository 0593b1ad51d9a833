"""
Level document import and export.
Documents are JSON with camelCase keys, as read by the game runtime.
"""

import json
import os
import re
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from .config import EditorConfig
from .models import FloorSegment, LevelDocument, Material


class MalformedDocumentError(ValueError):
    """Raised when a level document cannot be parsed or has the wrong shape."""


def default_document(config: Optional[EditorConfig] = None) -> LevelDocument:
    """A fresh level: the world bounds and a ground strip along the bottom."""
    config = config or EditorConfig()
    return LevelDocument(
        name=config.default_level_name,
        width=config.world_width,
        height=config.world_height,
        floors=[
            FloorSegment(
                x=0,
                y=config.ground_y,
                width=config.world_width,
                height=config.ground_height,
                material=Material(config.default_material),
            )
        ],
    )


def document_from_dict(data: Any) -> LevelDocument:
    if not isinstance(data, dict):
        raise MalformedDocumentError("Level document must be a JSON object")
    try:
        return LevelDocument.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"])
        raise MalformedDocumentError(
            f"{e.error_count()} invalid field(s), first at '{where}': {first['msg']}"
        ) from e


def parse_document(text: str) -> LevelDocument:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDocumentError("Invalid JSON: nesting too deep") from e
    return document_from_dict(data)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def export_document(
    document: LevelDocument,
    name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Stamps the document with its name and a fresh lastModified, then
    serialises it. NaN numbers are written as null.
    """
    if name:
        document.name = name
    document.last_modified = iso_timestamp(now)
    return document.model_dump_json(by_alias=True, indent=2)


def export_filename(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", name, flags=re.IGNORECASE).lower() + ".json"


def load_file(path: str) -> LevelDocument:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocumentError(f"Cannot read {path}: {e}") from e
    return parse_document(text)


def save_file(
    path: str, document: LevelDocument, name: Optional[str] = None
) -> str:
    text = export_document(document, name)
    # Ensure directory exists
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
