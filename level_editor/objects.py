"""
Placement, hit testing and editing of gameplay objects.
Vendors, spawners and portals live in three independent collections.
"""

import math
import re
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from .models import (
    LevelDocument,
    Number,
    ObjectKind,
    Portal,
    SelectionRef,
    Spawner,
    Vendor,
)

# Checked in this order by hit tests
HIT_ORDER = (ObjectKind.VENDOR, ObjectKind.SPAWNER, ObjectKind.PORTAL)

COLLECTIONS = {
    ObjectKind.VENDOR: "vendors",
    ObjectKind.SPAWNER: "spawners",
    ObjectKind.PORTAL: "portals",
}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def coerce_int(value: Any) -> Number:
    """
    Permissive integer parse: takes the leading integer of a string,
    truncates floats, and yields NaN when nothing numeric is found.
    No range checks are made.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else math.nan
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else math.nan


def round_half_up(v: float) -> int:
    return math.floor(v + 0.5)


# Editable fields per kind and their coercion
EDITABLE_FIELDS: Dict[ObjectKind, Dict[str, Callable[[Any], Any]]] = {
    ObjectKind.VENDOR: {"name": str},
    ObjectKind.SPAWNER: {
        "type": str,
        "respawn_time": coerce_int,
        "visibility_range": coerce_int,
        "min_level": coerce_int,
        "max_level": coerce_int,
    },
    ObjectKind.PORTAL: {"target_level": str},
}


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class ObjectRegistry:
    def __init__(
        self,
        document: LevelDocument,
        spawner_hitbox: int = 32,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.document = document
        self.spawner_hitbox = spawner_hitbox
        self.now_ms = clock or _wall_clock_ms

    def bind(self, document: LevelDocument):
        self.document = document

    def collection(self, kind: ObjectKind) -> List:
        return getattr(self.document, COLLECTIONS[kind])

    def _rect(self, kind: ObjectKind, obj) -> Tuple[Number, Number, Number, Number]:
        if kind == ObjectKind.SPAWNER:
            # Spawners hit as a fixed box; visibility range is ignored
            return obj.x, obj.y, self.spawner_hitbox, self.spawner_hitbox
        return obj.x, obj.y, obj.width, obj.height

    def _contains(self, kind: ObjectKind, obj, x: float, y: float) -> bool:
        left, top, width, height = self._rect(kind, obj)
        return left <= x <= left + width and top <= y <= top + height

    # Placement

    def place_vendor(self, vendor_id: str, name: str, x: float, y: float) -> Vendor:
        """Places the level's only vendor, replacing any existing one."""
        vendor = Vendor(
            id=vendor_id or "vendor_1",
            name=name or "Merchant",
            x=round_half_up(x),
            y=round_half_up(y),
        )
        self.document.vendors = [vendor]
        return vendor

    def next_spawner_id(self) -> str:
        return f"sp_{len(self.document.spawners) + 1}"

    def next_portal_id(self) -> str:
        return f"portal_{len(self.document.portals) + 1}"

    def place_spawner(
        self,
        x: float,
        y: float,
        spawner_type: str = "basic",
        respawn_time: Any = 5000,
        visibility_range: Any = 400,
        min_level: Any = 1,
        max_level: Any = 3,
    ) -> Spawner:
        respawn_time = coerce_int(respawn_time)
        spawner = Spawner(
            id=self.next_spawner_id(),
            x=round_half_up(x),
            y=round_half_up(y),
            type=spawner_type,
            respawn_time=respawn_time,
            visibility_range=coerce_int(visibility_range),
            min_level=coerce_int(min_level),
            max_level=coerce_int(max_level),
            current_enemy_id=None,
            # Deadline only; advancing it is the game runtime's job
            respawn_at=self.now_ms() + respawn_time,
        )
        self.document.spawners.append(spawner)
        return spawner

    def place_portal(
        self, x: float, y: float, target_level: str = "sample_level"
    ) -> Portal:
        portal = Portal(
            id=self.next_portal_id(),
            x=round_half_up(x),
            y=round_half_up(y),
            target_level=target_level or "sample_level",
        )
        self.document.portals.append(portal)
        return portal

    # Queries

    def hit_test(self, x: float, y: float) -> Optional[SelectionRef]:
        for kind in HIT_ORDER:
            for obj in self.collection(kind):
                if self._contains(kind, obj, x, y):
                    return SelectionRef(kind, obj.id)
        return None

    def resolve(self, ref: Optional[SelectionRef]):
        if ref is None:
            return None
        for obj in self.collection(ref.kind):
            if obj.id == ref.id:
                return obj
        return None

    def counts(self) -> Dict[ObjectKind, int]:
        return {kind: len(self.collection(kind)) for kind in HIT_ORDER}

    def summary(self) -> str:
        c = self.counts()
        return (
            f"Vendors: {c[ObjectKind.VENDOR]} | "
            f"Spawners: {c[ObjectKind.SPAWNER]} | "
            f"Portals: {c[ObjectKind.PORTAL]}"
        )

    # Mutation

    def erase_at(self, x: float, y: float) -> int:
        """Removes every object of any kind whose box contains (x, y)."""
        removed = 0
        for kind in HIT_ORDER:
            attr = COLLECTIONS[kind]
            before = getattr(self.document, attr)
            kept = [o for o in before if not self._contains(kind, o, x, y)]
            removed += len(before) - len(kept)
            setattr(self.document, attr, kept)
        return removed

    def update(self, ref: SelectionRef, fields: Dict[str, Any]) -> bool:
        """
        Applies edited field values to the referenced object in place.
        Unknown fields are ignored and the id never changes. Numeric
        values are coerced but not validated, so min_level > max_level
        or a NaN respawn time are stored as given.
        """
        obj = self.resolve(ref)
        if obj is None:
            return False

        editable = EDITABLE_FIELDS[ref.kind]
        for key, value in fields.items():
            convert = editable.get(key)
            if convert is None:
                continue
            setattr(obj, key, convert(value))
        return True

    def delete(self, ref: SelectionRef) -> bool:
        attr = COLLECTIONS[ref.kind]
        before = getattr(self.document, attr)
        kept = [o for o in before if o.id != ref.id]
        setattr(self.document, attr, kept)
        return len(kept) != len(before)
