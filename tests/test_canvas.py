"""Tests for the drill canvas widget."""

from conftest import draft
from drill_editor.drills.document import DrillDocument
from drill_editor.drills.toolbox import Toolbox
from drill_editor.gui.canvas import DrillCanvas


class TestDrillCanvas:
    """Test document switching on the canvas."""

    def test_set_document_again_keeps_single_engine(self, app_settings) -> None:
        canvas = DrillCanvas(Toolbox(app_settings.toolbox))
        doc = DrillDocument()

        canvas.set_document(doc)
        first_engine = canvas.engine
        canvas.set_document(doc)

        assert canvas.engine is not first_engine
        # The canvas itself and the current engine
        assert len(doc._listeners) == 2

    def test_switching_documents_releases_previous(self, app_settings) -> None:
        canvas = DrillCanvas(Toolbox(app_settings.toolbox))
        old = DrillDocument()
        canvas.set_document(old)

        canvas.set_document(DrillDocument())
        assert old._listeners == []

        canvas.set_document(None)
        assert canvas.engine is None

    def test_edits_emit_document_edited(self, app_settings) -> None:
        canvas = DrillCanvas(Toolbox(app_settings.toolbox))
        doc = DrillDocument()
        canvas.set_document(doc)
        edits: list[bool] = []
        canvas.document_edited.connect(lambda: edits.append(True))

        doc.add_element(0, draft("player", "team1"))
        assert edits == [True]
