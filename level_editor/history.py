"""
Snapshot-based undo for the Level Editor.
Every committed edit stores a full copy of the document.
"""

from typing import List, Optional

from .models import LevelDocument


class HistoryStack:
    def __init__(self, max_depth: int = 50):
        self.max_depth = max_depth
        self.entries: List[LevelDocument] = []
        self.cursor = -1

    def __len__(self) -> int:
        return len(self.entries)

    def capture(self, document: LevelDocument):
        # Anything past the cursor is lost; there is no redo.
        del self.entries[self.cursor + 1 :]
        self.entries.append(document.clone())
        self.cursor = len(self.entries) - 1

        if len(self.entries) > self.max_depth:
            self.entries.pop(0)
            self.cursor -= 1

    def undo(self) -> Optional[LevelDocument]:
        """Steps back one snapshot. The oldest entry is never undone past."""
        if self.cursor <= 0:
            return None
        self.cursor -= 1
        return self.entries[self.cursor].clone()

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def undo_steps_available(self) -> int:
        return max(0, self.cursor)

    def reset(self):
        self.entries.clear()
        self.cursor = -1
