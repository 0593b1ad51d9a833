"""
Configuration settings for the level editor.
"""

from pydantic import BaseModel, ConfigDict
from typing import Dict, Any
import toml
import os
import sys

# Placement defaults per object tool, overridable from the [tools] table.
DEFAULT_TOOL_SETTINGS: Dict[str, Dict[str, Any]] = {
    "vendor": {"vendor_id": "vendor_1", "name": "Merchant"},
    "spawner": {
        "spawner_type": "basic",
        "respawn_time": 5000,
        "visibility_range": 400,
        "min_level": 1,
        "max_level": 3,
    },
    "portal": {"target_level": "sample_level"},
}


class EditorConfig(BaseModel):
    """Configuration settings for the editor."""

    # World settings
    world_width: int = 3600
    world_height: int = 600
    grid_size: int = 32

    # Fresh level
    default_level_name: str = "Custom Level"
    default_material: str = "dirt"
    ground_y: int = 550
    ground_height: int = 50

    # Objects
    spawner_hitbox: int = 32

    # View settings
    min_zoom: float = 0.1
    max_zoom: float = 5.0

    # History
    max_undo_steps: int = 50

    # Tool defaults
    tools: Dict[str, Dict[str, Any]] = {}

    model_config = ConfigDict(extra="allow")

    def tool_settings(self, tool: str) -> Dict[str, Any]:
        """Placement settings for an object tool, config values over defaults."""
        settings = dict(DEFAULT_TOOL_SETTINGS.get(tool, {}))
        settings.update(self.tools.get(tool, {}))
        return settings

    @classmethod
    def load_from_toml(cls, path: str = "level_editor.toml") -> "EditorConfig":
        """Load configuration from a TOML file."""
        if not os.path.exists(path):
            print(f"Warning: Config file {path} not found. Using defaults.", file=sys.stderr)
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)

            config = cls(**data.get("editor", {}))
            config.tools = data.get("tools", {})
            return config
        except Exception as e:
            print(f"Error loading config {path}: {e}", file=sys.stderr)
            return cls()
