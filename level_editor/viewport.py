"""
Screen to world coordinate mapping under zoom and pan.
"""

from typing import Tuple

WHEEL_ZOOM_OUT = 0.9
WHEEL_ZOOM_IN = 1.1
BUTTON_ZOOM_OUT = 0.8
BUTTON_ZOOM_IN = 1.2


class ViewportTransform:
    def __init__(self, min_zoom: float = 0.1, max_zoom: float = 5.0):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        # Top-left of the canvas in device pixels
        self.origin_left = 0.0
        self.origin_top = 0.0

    def set_origin(self, left: float, top: float):
        self.origin_left, self.origin_top = left, top

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (
            (sx - self.origin_left - self.pan_x) / self.zoom,
            (sy - self.origin_top - self.pan_y) / self.zoom,
        )

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return (
            wx * self.zoom + self.pan_x + self.origin_left,
            wy * self.zoom + self.pan_y + self.origin_top,
        )

    def zoom_by(self, factor: float) -> float:
        """
        Multiplies the zoom and clamps it. Zoom is anchored at the origin,
        so the world point under the pointer moves.
        """
        self.zoom = max(self.min_zoom, min(self.max_zoom, self.zoom * factor))
        return self.zoom

    def wheel(self, delta_y: float) -> float:
        return self.zoom_by(WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN)

    def zoom_in(self) -> float:
        return self.zoom_by(BUTTON_ZOOM_IN)

    def zoom_out(self) -> float:
        return self.zoom_by(BUTTON_ZOOM_OUT)

    def pan_by(self, dx: float, dy: float):
        self.pan_x += dx
        self.pan_y += dy

    def reset_view(self):
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)
