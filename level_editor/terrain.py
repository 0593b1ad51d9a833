"""
Grid-aligned terrain painting for the Level Editor.
Operates on the floor segments of the bound document.
"""

import math
from typing import List, Tuple, Union

from .models import FloorSegment, LevelDocument, Material


class TerrainGrid:
    def __init__(self, document: LevelDocument, cell_size: int = 32):
        self.document = document
        self.cell_size = cell_size

    def bind(self, document: LevelDocument):
        self.document = document

    @property
    def floors(self) -> List[FloorSegment]:
        return self.document.floors

    def cell_at(self, x: float, y: float) -> Tuple[int, int]:
        c = self.cell_size
        return math.floor(x / c) * c, math.floor(y / c) * c

    def _covers_cell(self, seg: FloorSegment, gx: int, gy: int) -> bool:
        # Containment, not intersection: partial overlaps never match.
        c = self.cell_size
        return (
            seg.x <= gx
            and seg.x + seg.width >= gx + c
            and seg.y <= gy
            and seg.y + seg.height >= gy + c
        )

    def segments_at(self, x: float, y: float) -> List[FloorSegment]:
        gx, gy = self.cell_at(x, y)
        return [s for s in self.document.floors if self._covers_cell(s, gx, gy)]

    def _remove_covering(self, gx: int, gy: int) -> int:
        before = len(self.document.floors)
        self.document.floors = [
            s for s in self.document.floors if not self._covers_cell(s, gx, gy)
        ]
        return before - len(self.document.floors)

    def add_segment(
        self, x: float, y: float, width: float, height: float, material
    ) -> FloorSegment:
        seg = FloorSegment(
            x=x, y=y, width=width, height=height, material=Material(material)
        )
        self.document.floors.append(seg)
        return seg

    def paint(self, x: float, y: float, material: Union[Material, str]) -> FloorSegment:
        """Replaces whatever fully covers the cell at (x, y) with one new tile."""
        material = Material(material)
        gx, gy = self.cell_at(x, y)
        self._remove_covering(gx, gy)
        return self.add_segment(gx, gy, self.cell_size, self.cell_size, material)

    def erase(self, x: float, y: float) -> int:
        gx, gy = self.cell_at(x, y)
        return self._remove_covering(gx, gy)
