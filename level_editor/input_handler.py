"""
Input handling logic for the Level Editor.
Turns pointer, wheel and key events into session operations.
"""

from typing import TYPE_CHECKING, Tuple

from .models import DragState, Tool
from .objects import round_half_up

if TYPE_CHECKING:
    from .session import EditSession

LEFT_BUTTON = 0
MIDDLE_BUTTON = 1
RIGHT_BUTTON = 2


class InputHandler:
    def __init__(self, session: "EditSession"):
        self.session = session
        self.space_held = False
        self.last_x = 0.0
        self.last_y = 0.0
        self.pointer_world: Tuple[float, float] = (0.0, 0.0)

    @property
    def state(self) -> DragState:
        return self.session.drag_state

    def _set_state(self, state: DragState):
        self.session.drag_state = state

    def pointer_down(self, sx: float, sy: float, button: int = LEFT_BUTTON):
        x, y = self.session.screen_to_world(sx, sy)
        self.last_x, self.last_y = sx, sy

        if button == LEFT_BUTTON:
            if self.session.tool == Tool.SELECT:
                self.session.select_at(x, y)
            elif self.space_held:
                self._set_state(DragState.PANNING)
            else:
                self._set_state(DragState.PLACING)
                self.session.place_at(x, y)
        elif button == RIGHT_BUTTON:
            self._set_state(DragState.ERASING)
            self.session.erase_at(x, y)
        elif button == MIDDLE_BUTTON:
            self._set_state(DragState.PANNING)

    def pointer_move(self, sx: float, sy: float):
        x, y = self.session.screen_to_world(sx, sy)
        self.pointer_world = (x, y)

        state = self.state
        if state == DragState.PANNING:
            self.session.pan_by(sx - self.last_x, sy - self.last_y)
        elif state == DragState.PLACING:
            self.session.place_at(x, y)
        elif state == DragState.ERASING:
            self.session.erase_at(x, y)

        self.last_x, self.last_y = sx, sy

    def pointer_up(self):
        self._set_state(DragState.IDLE)

    def wheel(self, delta_y: float) -> float:
        return self.session.wheel(delta_y)

    def key_down(self, key: str, ctrl: bool = False) -> bool:
        """Returns True when the key was handled."""
        if key == " ":
            self.space_held = True
            return True
        if ctrl and key.lower() == "z":
            self.session.undo()
            return True
        return False

    def key_up(self, key: str) -> bool:
        if key == " ":
            self.space_held = False
            return True
        return False

    @property
    def mouse_position_label(self) -> str:
        x, y = self.pointer_world
        return f"X: {round_half_up(x)}, Y: {round_half_up(y)}"

    @property
    def cursor(self) -> str:
        return "grab" if self.space_held else "crosshair"
