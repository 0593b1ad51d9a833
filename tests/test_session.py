"""
Tests for the editing session: tools, history capture and import/export.
"""

import json

import pytest

from level_editor.document_io import default_document
from level_editor.models import FloorSegment, Material, ObjectKind, Tool


def floor_tuples(document):
    return [(f.x, f.y, f.width, f.height, f.material) for f in document.floors]


class TestScenario:
    """End-to-end paint, erase and undo."""

    def test_paint_erase_undo(self, session):
        """Test the paint/erase/undo walk-through restores each state."""
        ground = (0, 550, 3600, 50, Material.DIRT)
        stone = (0, 0, 32, 32, Material.STONE)
        assert floor_tuples(session.document) == [ground]

        session.select_tool(Tool.FLOOR, "stone")
        session.place_at(10, 10)
        assert floor_tuples(session.document) == [ground, stone]

        session.erase_at(10, 10)
        assert floor_tuples(session.document) == [ground]

        assert session.undo()
        assert floor_tuples(session.document) == [ground, stone]

        assert session.undo()
        assert floor_tuples(session.document) == [ground]

        assert not session.undo()


class TestHistoryCapture:
    """Test which operations record snapshots."""

    def test_initial_state_captured(self, session):
        """Test the session starts with one snapshot."""
        assert len(session.history) == 1
        assert session.undo_status() == "No changes to undo"

    def test_each_mutation_captures_once(self, session):
        """Test place, erase, delete, clear each add one entry."""
        session.place_at(10, 10)
        assert len(session.history) == 2

        session.select_tool("portal")
        session.place_at(200, 100)
        assert len(session.history) == 3

        session.erase_at(10, 10)
        assert len(session.history) == 4

        session.select_tool("select")
        session.select_at(210, 110)
        session.delete_selected()
        assert len(session.history) == 5

        session.clear_level()
        assert len(session.history) == 6
        assert session.undo_status() == "Undo (5 steps available)"

    def test_view_changes_do_not_capture(self, session):
        """Test zoom and pan leave history alone."""
        session.zoom_in()
        session.zoom_out()
        session.wheel(1)
        session.pan_by(10, 10)
        session.reset_view()

        assert len(session.history) == 1

    def test_erase_miss_does_not_capture(self, session):
        """Test erasing nothing is a no-op."""
        assert not session.erase_at(400, 100)
        assert len(session.history) == 1

    def test_drag_produces_entry_per_sample(self, session):
        """Test each paint call during a drag adds one entry."""
        for x in range(0, 320, 32):
            session.place_at(x, 0)
        assert len(session.history) == 11


class TestTools:
    """Test tool switching and placement dispatch."""

    def test_tool_labels(self, session):
        assert session.status_message == "Floor: dirt"
        session.select_tool("spawner")
        assert session.status_message == "Object: spawner"
        session.select_tool("select")
        assert session.status_message == "Tool: Select"

    def test_select_tool_in_select_mode_does_nothing(self, session):
        """Test placing with the select tool changes nothing."""
        session.select_tool(Tool.SELECT)
        assert not session.place_at(10, 10)
        assert len(session.history) == 1

    def test_unknown_tool_rejected(self, session):
        with pytest.raises(ValueError):
            session.select_tool("lasso")

    def test_spawner_uses_tool_settings(self, session):
        """Test configured spawner settings are used for placement."""
        session.select_tool(Tool.SPAWNER)
        session.configure_tool(Tool.SPAWNER, spawner_type="boss", respawn_time="15000")
        session.place_at(2600, 486)

        s = session.document.spawners[0]
        assert (s.id, s.type, s.respawn_time) == ("sp_1", "boss", 15000)

    def test_vendor_replaces(self, session):
        """Test a second vendor placement replaces the first."""
        session.select_tool(Tool.VENDOR)
        session.place_at(100, 100)
        session.place_at(600, 200)

        assert len(session.document.vendors) == 1
        assert session.document.vendors[0].x == 600


class TestSelection:
    """Test selection through the session."""

    def setup_portal(self, session):
        session.select_tool(Tool.PORTAL)
        session.place_at(100, 100)
        session.select_tool(Tool.SELECT)

    def test_select_and_miss(self, session):
        """Test a hit selects and a miss deselects."""
        self.setup_portal(session)

        ref = session.select_at(120, 120)
        assert ref.kind == ObjectKind.PORTAL
        assert session.selection.is_selected(ObjectKind.PORTAL, "portal_1")

        assert session.select_at(1000, 10) is None
        assert not session.selection.is_active

    def test_select_only_in_select_tool(self, session):
        """Test select_at does nothing with another tool active."""
        self.setup_portal(session)
        session.select_tool(Tool.FLOOR)
        assert session.select_at(120, 120) is None

    def test_tool_change_clears_selection(self, session):
        self.setup_portal(session)
        session.select_at(120, 120)
        session.select_tool(Tool.FLOOR, "grass")
        assert not session.selection.is_active

    def test_update_selected_captures(self, session):
        """Test editing the selected object records a snapshot."""
        self.setup_portal(session)
        session.select_at(120, 120)
        before = len(session.history)

        assert session.update_selected({"target_level": "dungeon_2"})
        assert session.document.portals[0].target_level == "dungeon_2"
        assert len(session.history) == before + 1

    def test_delete_without_selection(self, session):
        """Test delete with nothing selected is a no-op."""
        assert not session.delete_selected()
        assert len(session.history) == 1

    def test_delete_stale_selection_records_nothing(self, session):
        """Test deleting an object that no longer exists adds no history."""
        self.setup_portal(session)
        session.select_at(120, 120)
        ref = session.selection.current
        session.undo()
        session.selection.select(ref)
        entries = len(session.history)

        assert not session.delete_selected()
        assert len(session.history) == entries
        assert not session.selection.is_active

    def test_undo_clears_selection(self, session):
        """Test undo always drops the selection."""
        self.setup_portal(session)
        session.select_at(120, 120)
        session.undo()

        assert not session.selection.is_active
        assert session.document.portals == []

    def test_stale_reference_after_undo(self, session):
        """Test a dangling reference resolves to nothing."""
        self.setup_portal(session)
        session.select_at(120, 120)
        ref = session.selection.current
        session.undo()
        session.selection.select(ref)

        assert session.selection.resolve() is None
        session.delete_selected()
        assert session.document.portals == []


class TestClear:
    def test_clear_restores_default(self, session, config):
        session.place_at(10, 10)
        session.select_tool(Tool.SPAWNER)
        session.place_at(50, 50)
        session.clear_level()

        assert session.document == default_document(config)


class TestImportExport:
    """Test loading and saving documents through the session."""

    def test_export_stamps_name_and_time(self, session):
        text = session.export_text("My Level")
        data = json.loads(text)

        assert data["name"] == "My Level"
        assert data["lastModified"].endswith("Z")
        assert data["floors"][0]["material"] == "dirt"
        assert set(data) >= {"width", "height", "vendors", "spawners", "portals"}

    def test_load_replaces_document(self, session):
        doc = {
            "name": "Imported",
            "width": 3600,
            "height": 600,
            "floors": [{"x": 5, "y": 7, "width": 50, "height": 13, "material": "sand"}],
            "vendors": [],
            "spawners": [],
            "portals": [],
        }
        assert session.load_text(json.dumps(doc))

        assert session.document.name == "Imported"
        assert floor_tuples(session.document) == [(5, 7, 50, 13, Material.SAND)]

    def test_load_is_undoable(self, session):
        """Test undo after a load returns to the previous level."""
        session.place_at(10, 10)
        before = session.document.clone()
        session.load_text(json.dumps({"name": "Other", "floors": []}))

        assert session.undo()
        assert session.document == before

    def test_malformed_load_keeps_document(self, session, capsys):
        """Test a parse failure leaves the current level intact."""
        session.place_at(10, 10)
        before = session.document.clone()
        entries = len(session.history)

        assert not session.load_text("{not json")
        assert session.document == before
        assert len(session.history) == entries
        assert session.status_message.startswith("Error loading level:")
        assert "Error loading level" in capsys.readouterr().err

    def test_wrong_shape_rejected(self, session):
        """Test a document with a bad material is rejected."""
        bad = {"floors": [{"x": 0, "y": 0, "width": 1, "height": 1, "material": "lava"}]}
        assert not session.load_text(json.dumps(bad))
        assert session.document.name == "Custom Level"

    def test_save_and_load_path(self, session, tmp_path):
        session.select_tool(Tool.SPAWNER)
        session.place_at(10, 10)
        path = tmp_path / "levels" / "one.json"
        session.save_path(str(path), "One")

        other = type(session)(session.config)
        assert other.load_path(str(path))
        assert other.document.spawners[0].id == "sp_1"
        assert other.document.name == "One"

    def test_load_missing_path(self, session, tmp_path):
        assert not session.load_path(str(tmp_path / "missing.json"))
        assert session.status_message.startswith("Error loading level:")

    def test_load_undecodable_file(self, session, tmp_path):
        """Test a file that is not UTF-8 is reported, not raised."""
        path = tmp_path / "binary.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')
        before = session.document.clone()

        assert not session.load_path(str(path))
        assert session.document == before
        assert session.status_message.startswith("Error loading level:")

    def test_load_deeply_nested_text(self, session):
        """Test pathological nesting is reported as a load error."""
        assert not session.load_text("[" * 100000 + "]" * 100000)
        assert session.document.name == "Custom Level"

    def test_load_numeric_ids(self, session):
        """Test documents from other tools may use numeric ids."""
        doc = {
            "vendors": [{"id": 1, "name": "Smith", "x": 0, "y": 0}],
            "portals": [{"id": 7, "x": 100, "y": 0, "targetLevel": "cave"}],
        }
        assert session.load_text(json.dumps(doc))
        assert session.document.vendors[0].id == 1
        assert json.loads(session.export_text())["portals"][0]["id"] == 7

        session.select_tool(Tool.SELECT)
        session.select_at(110, 10)
        assert session.delete_selected()
        assert session.document.portals == []
