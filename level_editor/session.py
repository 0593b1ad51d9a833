"""
Editing session for the Level Editor.
Owns the document and every editing component, and records one history
snapshot after each committed change.
"""

import sys
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .config import EditorConfig
from .document_io import (
    MalformedDocumentError,
    default_document,
    export_document,
    load_file,
    parse_document,
    save_file,
)
from .history import HistoryStack
from .models import DragState, LevelDocument, Material, SelectionRef, Tool
from .objects import ObjectRegistry
from .selection import SelectionController
from .terrain import TerrainGrid
from .viewport import ViewportTransform

OBJECT_TOOLS = (Tool.VENDOR, Tool.SPAWNER, Tool.PORTAL)


class EditSession:
    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or EditorConfig()
        self.document = default_document(self.config)

        self.viewport = ViewportTransform(self.config.min_zoom, self.config.max_zoom)
        self.terrain = TerrainGrid(self.document, self.config.grid_size)
        self.objects = ObjectRegistry(self.document, self.config.spawner_hitbox, clock)
        self.selection = SelectionController(self.objects)
        self.history = HistoryStack(self.config.max_undo_steps)

        self.tool = Tool.FLOOR
        self.material = Material(self.config.default_material)
        self.tool_settings: Dict[Tool, Dict[str, Any]] = {
            t: self.config.tool_settings(t.value) for t in OBJECT_TOOLS
        }
        self.drag_state = DragState.IDLE
        self.status_message = self.tool_label()

        # The initial level is the floor of the undo history
        self._commit()

    # Internal

    def _commit(self):
        self.history.capture(self.document)

    def _replace_document(self, document: LevelDocument):
        self.document = document
        self.terrain.bind(document)
        self.objects.bind(document)

    # Tools

    def tool_label(self) -> str:
        if self.tool == Tool.FLOOR:
            return f"Floor: {self.material.value}"
        if self.tool == Tool.SELECT:
            return "Tool: Select"
        return f"Object: {self.tool.value}"

    def select_tool(
        self, tool: Union[Tool, str], material: Union[Material, str, None] = None
    ):
        """Switches tool. Any drag in progress is abandoned."""
        self.tool = Tool(tool)
        if material is not None:
            self.material = Material(material)
        if self.tool != Tool.SELECT:
            self.selection.clear()
        self.drag_state = DragState.IDLE
        self.status_message = self.tool_label()

    def configure_tool(self, tool: Union[Tool, str], **settings):
        self.tool_settings[Tool(tool)].update(settings)

    # Editing

    def place_at(self, x: float, y: float) -> bool:
        if self.tool == Tool.FLOOR:
            self.terrain.paint(x, y, self.material)
        elif self.tool == Tool.VENDOR:
            s = self.tool_settings[Tool.VENDOR]
            self.objects.place_vendor(s.get("vendor_id"), s.get("name"), x, y)
        elif self.tool == Tool.SPAWNER:
            s = self.tool_settings[Tool.SPAWNER]
            spawner = self.objects.place_spawner(
                x,
                y,
                spawner_type=s.get("spawner_type", "basic"),
                respawn_time=s.get("respawn_time"),
                visibility_range=s.get("visibility_range"),
                min_level=s.get("min_level"),
                max_level=s.get("max_level"),
            )
            self.status_message = f"Placed {spawner.id}"
        elif self.tool == Tool.PORTAL:
            s = self.tool_settings[Tool.PORTAL]
            portal = self.objects.place_portal(x, y, s.get("target_level"))
            self.status_message = f"Placed {portal.id}"
        else:
            return False
        self._commit()
        return True

    def erase_at(self, x: float, y: float) -> bool:
        """Erases terrain at the cell and objects at the point."""
        removed = self.terrain.erase(x, y) + self.objects.erase_at(x, y)
        if not removed:
            return False
        if self.selection.is_active and self.selection.resolve() is None:
            self.selection.clear()
        self._commit()
        return True

    def select_at(self, x: float, y: float) -> Optional[SelectionRef]:
        if self.tool != Tool.SELECT:
            return None
        ref = self.selection.select_at(x, y)
        self.status_message = (
            f"Selected {ref.kind.value} {ref.id}" if ref else "Nothing selected"
        )
        return ref

    def update_selected(self, fields: Dict[str, Any]) -> bool:
        if not self.selection.is_active:
            return False
        if not self.objects.update(self.selection.current, fields):
            return False
        self._commit()
        self.status_message = f"Updated {self.selection.current.id}"
        return True

    def delete_selected(self) -> bool:
        ref = self.selection.current
        if ref is None:
            return False
        removed = self.objects.delete(ref)
        self.selection.clear()
        if not removed:
            return False
        self._commit()
        self.status_message = f"Deleted {ref.kind.value} {ref.id}"
        return True

    def clear_level(self):
        self._replace_document(default_document(self.config))
        self.selection.clear()
        self._commit()
        self.status_message = "Level cleared."

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._replace_document(snapshot)
        self.selection.clear()
        self.status_message = "Undo applied"
        return True

    def undo_status(self) -> str:
        if not self.history.can_undo:
            return "No changes to undo"
        return f"Undo ({self.history.undo_steps_available} steps available)"

    # Import / export

    def load_document(self, document: LevelDocument):
        self._replace_document(document)
        self.selection.clear()
        self.drag_state = DragState.IDLE
        self._commit()
        self.status_message = f"Loaded level: {document.name}"

    def load_text(self, text: str) -> bool:
        try:
            document = parse_document(text)
        except MalformedDocumentError as e:
            self._report_load_error(e)
            return False
        self.load_document(document)
        return True

    def load_path(self, path: str) -> bool:
        try:
            document = load_file(path)
        except MalformedDocumentError as e:
            self._report_load_error(e)
            return False
        self.load_document(document)
        return True

    def _report_load_error(self, error: Exception):
        self.status_message = f"Error loading level: {error}"
        print(self.status_message, file=sys.stderr)

    def export_text(self, name: Optional[str] = None) -> str:
        return export_document(self.document, name)

    def save_path(self, path: str, name: Optional[str] = None) -> str:
        save_file(path, self.document, name)
        self.status_message = f"Level saved: {path}"
        return path

    # View

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return self.viewport.screen_to_world(sx, sy)

    def zoom_in(self) -> float:
        return self.viewport.zoom_in()

    def zoom_out(self) -> float:
        return self.viewport.zoom_out()

    def wheel(self, delta_y: float) -> float:
        return self.viewport.wheel(delta_y)

    def pan_by(self, dx: float, dy: float):
        self.viewport.pan_by(dx, dy)

    def reset_view(self):
        self.viewport.reset_view()
