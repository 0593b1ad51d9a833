"""
Pytest configuration and shared fixtures for Level Editor tests.
"""

import pytest

from level_editor.config import EditorConfig
from level_editor.document_io import default_document
from level_editor.history import HistoryStack
from level_editor.input_handler import InputHandler
from level_editor.objects import ObjectRegistry
from level_editor.session import EditSession
from level_editor.terrain import TerrainGrid
from level_editor.viewport import ViewportTransform

FIXED_NOW_MS = 1_700_000_000_000


def fixed_clock():
    return FIXED_NOW_MS


@pytest.fixture
def config():
    """Default editor configuration."""
    return EditorConfig()


@pytest.fixture
def document(config):
    """A fresh level with only the ground strip."""
    return default_document(config)


@pytest.fixture
def viewport():
    return ViewportTransform()


@pytest.fixture
def terrain(document):
    return TerrainGrid(document, cell_size=32)


@pytest.fixture
def registry(document):
    """Object registry with a frozen clock."""
    return ObjectRegistry(document, spawner_hitbox=32, clock=fixed_clock)


@pytest.fixture
def history():
    return HistoryStack(max_depth=50)


@pytest.fixture
def session(config):
    """An editing session with a frozen clock."""
    return EditSession(config, clock=fixed_clock)


@pytest.fixture
def handler(session):
    return InputHandler(session)
