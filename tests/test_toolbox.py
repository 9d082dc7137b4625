"""Tests for the toolbox catalog and team presets."""

import pytest

from drill_editor.drills.document import DrillDocument
from drill_editor.drills.models import InvalidElementError, KIND_SUBTYPES
from drill_editor.drills.toolbox import CATALOG, Toolbox, size_steps


@pytest.fixture
def toolbox(app_settings) -> Toolbox:
    return Toolbox(app_settings.toolbox)


class TestToolboxDrafts:
    """Test drafts produced for dropped toolbox items."""

    def test_coach_is_black_and_labelled(self, toolbox: Toolbox) -> None:
        draft = toolbox.draft("player", "coach", 10, 20)
        assert draft.color == "#000000"
        assert draft.text == "C"
        assert draft.size == 1.0

    def test_players_use_team_preset(self, toolbox: Toolbox, app_settings) -> None:
        app_settings.toolbox.set_team_color("team2", "#22c55e")
        app_settings.toolbox.set_team_size("team2", 1.5)

        draft = toolbox.draft("player", "team2", 10, 20)
        assert draft.color == "#22c55e"
        assert draft.size == 1.5
        assert draft.text is None

    def test_equipment_uses_active_team_color(self, toolbox: Toolbox, app_settings) -> None:
        app_settings.toolbox.active_team = "team2"
        draft = toolbox.draft("equipment", "cone", 10, 20)
        assert draft.color == app_settings.toolbox.get_team_color("team2")
        assert draft.size == 1.0

    def test_text_gets_default_label(self, toolbox: Toolbox) -> None:
        assert toolbox.draft("text", "text", 0, 0).text == "Sample Text"
        assert toolbox.draft("text", "note", 0, 0).text == "Note"

    def test_negative_drop_is_clamped(self, toolbox: Toolbox) -> None:
        draft = toolbox.draft("movement", "arrow", -15, 40)
        assert (draft.x, draft.y) == (0.0, 40.0)

    def test_unknown_item_rejected(self, toolbox: Toolbox) -> None:
        with pytest.raises(InvalidElementError):
            toolbox.draft("player", "referee", 0, 0)
        with pytest.raises(InvalidElementError):
            toolbox.draft("vehicle", "car", 0, 0)

    def test_catalog_covers_every_subtype(self) -> None:
        offered = {(item.kind, item.subtype) for item in CATALOG}
        expected = {(kind, subtype) for kind, subtypes in KIND_SUBTYPES.items() for subtype in subtypes}
        assert offered == expected


class TestPresets:
    """Test preset storage and preview labels."""

    def test_size_is_clamped(self, app_settings) -> None:
        app_settings.toolbox.set_team_size("team1", 9.0)
        assert app_settings.toolbox.get_team_size("team1") == 3.0

    def test_unknown_team_rejected(self, app_settings) -> None:
        with pytest.raises(ValueError):
            app_settings.toolbox.set_team_color("team3", "#000000")

    def test_size_steps(self) -> None:
        steps = size_steps()
        assert steps[0] == 0.5
        assert steps[-1] == 3.0
        assert len(steps) == 26

    def test_preview_label(self, toolbox: Toolbox) -> None:
        doc = DrillDocument()
        assert toolbox.preview_label(doc, "team1") == "1"
        doc.add_element(0, toolbox.draft("player", "team1", 50, 50))
        assert toolbox.preview_label(doc, "team1") == "2"
        assert toolbox.preview_label(doc, "team2") == "1"
        assert toolbox.preview_label(doc, "coach") == "C"
