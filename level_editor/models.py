"""
Core models and data structures for the Level Editor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]
# Documents from other tools may use numeric ids
ObjectId = Union[str, int]


class Material(Enum):
    DIRT = "dirt"
    GRASS = "grass"
    STONE = "stone"
    ROCK = "rock"
    SAND = "sand"
    WATER = "water"


class Tool(Enum):
    FLOOR = "floor"
    VENDOR = "vendor"
    SPAWNER = "spawner"
    PORTAL = "portal"
    SELECT = "select"


class ObjectKind(Enum):
    VENDOR = "vendor"
    SPAWNER = "spawner"
    PORTAL = "portal"


class DragState(Enum):
    IDLE = "IDLE"
    PANNING = "PANNING"
    PLACING = "PLACING"
    ERASING = "ERASING"


class Record(BaseModel):
    """Base for document records. Keys are camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    def clone(self):
        """Independent copy sharing no mutable storage with this record."""
        return self.model_copy(deep=True)


class FloorSegment(Record):
    x: Number
    y: Number
    width: Number
    height: Number
    material: Material


class Vendor(Record):
    id: ObjectId
    name: str = "Merchant"
    x: Number
    y: Number
    width: Number = 48
    height: Number = 64


class Spawner(Record):
    id: ObjectId
    x: Number
    y: Number
    type: str = "basic"
    respawn_time: Optional[Number] = 5000
    visibility_range: Optional[Number] = 400
    min_level: Optional[Number] = 1
    max_level: Optional[Number] = 3
    current_enemy_id: Optional[Any] = None
    respawn_at: Optional[Number] = None


class Portal(Record):
    id: ObjectId
    x: Number
    y: Number
    width: Number = 64
    height: Number = 64
    target_level: str = "sample_level"


class LevelDocument(Record):
    """The complete authoring state of one level."""

    name: str = "Custom Level"
    width: Number = 3600
    height: Number = 600
    last_modified: Optional[str] = None
    floors: List[FloorSegment] = Field(default_factory=list)
    vendors: List[Vendor] = Field(default_factory=list)
    spawners: List[Spawner] = Field(default_factory=list)
    portals: List[Portal] = Field(default_factory=list)


@dataclass(frozen=True)
class SelectionRef:
    kind: ObjectKind
    id: ObjectId
