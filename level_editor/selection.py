"""
Single-object selection for the Level Editor.
"""

from typing import TYPE_CHECKING, Optional

from .models import ObjectKind, SelectionRef

if TYPE_CHECKING:
    from .objects import ObjectRegistry


class SelectionController:
    """
    Idle when `current` is None, otherwise Selected(current).
    The reference is only a kind and an id; it is resolved against the
    registry on demand and is never validated automatically, so callers
    reset it after operations that may remove the object.
    """

    def __init__(self, registry: "ObjectRegistry"):
        self.registry = registry
        self.current: Optional[SelectionRef] = None

    @property
    def is_active(self) -> bool:
        return self.current is not None

    def select_at(self, x: float, y: float) -> Optional[SelectionRef]:
        # A miss deselects
        self.current = self.registry.hit_test(x, y)
        return self.current

    def select(self, ref: Optional[SelectionRef]):
        self.current = ref

    def clear(self):
        self.current = None

    def resolve(self):
        return self.registry.resolve(self.current)

    def is_selected(self, kind: ObjectKind, obj_id: str) -> bool:
        return (
            self.current is not None
            and self.current.kind == kind
            and self.current.id == obj_id
        )
