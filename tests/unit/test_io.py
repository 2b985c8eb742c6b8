"""Unit tests for the document I/O layer.

Tests for CommandReader and DrawListWriter.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from gerberview.core.color import WHITE
from gerberview.core.surface import CircleOp, RecordingSurface
from gerberview.domain import (
    CircleAperture,
    Draw,
    Flash,
    ImageTransform,
    Point,
    SetImageTransform,
    commands_to_dict,
)
from gerberview.exceptions import DocumentLoadError, DocumentSaveError, ParseFailure
from gerberview.io import CommandReader, DrawListWriter


@pytest.fixture
def document_path(tmp_path: Path) -> Path:
    """A small command document on disk."""
    commands = [
        SetImageTransform(ImageTransform(rotation_degrees=90)),
        Flash(Point(1, 1), CircleAperture(0.8)),
        Draw(Point(0, 0), Point(5, 0), CircleAperture(0.2)),
    ]
    path = tmp_path / "top_copper.json"
    path.write_text(json.dumps(commands_to_dict(commands)), encoding="utf-8")
    return path


class TestCommandReader:
    """Tests for CommandReader class."""

    def test_init(self):
        """Test CommandReader initialization."""
        path = Path("board.json")
        reader = CommandReader(path)
        assert reader._document_path == path
        assert reader._document is None
        assert reader.name == "board"

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises DocumentLoadError."""
        reader = CommandReader(Path("nonexistent.json"))
        with pytest.raises(DocumentLoadError, match="file not found"):
            reader.load()

    def test_document_before_load(self):
        """Test accessing the document before loading raises RuntimeError."""
        reader = CommandReader(Path("board.json"))
        with pytest.raises(RuntimeError, match="Document not loaded"):
            _ = reader.document

    def test_commands_before_load(self):
        """Test deserializing before loading raises RuntimeError."""
        reader = CommandReader(Path("board.json"))
        with pytest.raises(RuntimeError, match="Document not loaded"):
            reader.commands()

    def test_load_document(self, document_path):
        """Test loading and deserializing a document."""
        reader = CommandReader(document_path)
        reader.load()

        assert reader.command_count == 3
        commands = reader.commands()
        assert commands[1] == Flash(Point(1, 1), CircleAperture(0.8))
        assert isinstance(commands[2], Draw)

    def test_image_transform(self, document_path):
        """Test the document image transform is found."""
        with CommandReader(document_path) as reader:
            assert reader.image_transform() == ImageTransform(rotation_degrees=90)

    def test_context_manager_releases_document(self, document_path):
        """Test the document is released on exit."""
        with CommandReader(document_path) as reader:
            assert reader.command_count == 3
        assert reader._document is None

    def test_invalid_json(self, tmp_path):
        """Test a file that is not JSON raises DocumentLoadError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DocumentLoadError):
            CommandReader(path).load()

    @pytest.mark.parametrize("payload", [[], {"commands": {}}, {"shapes": []}])
    def test_wrong_shape(self, tmp_path, payload):
        """Test JSON without a commands list raises DocumentLoadError."""
        path = tmp_path / "wrong.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(DocumentLoadError, match="'commands' list"):
            CommandReader(path).load()

    def test_malformed_command(self, tmp_path):
        """Test a malformed command raises ParseFailure naming the document."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"commands": [{"type": "teleport"}]}), encoding="utf-8")

        reader = CommandReader(path)
        reader.load()
        with pytest.raises(ParseFailure) as exc_info:
            reader.commands()
        assert exc_info.value.document == "bad"

    def test_missing_field(self, tmp_path):
        """Test a command with a missing field raises ParseFailure."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"commands": [{"type": "flash"}]}), encoding="utf-8")

        reader = CommandReader(path)
        reader.load()
        with pytest.raises(ParseFailure):
            reader.commands()


class TestDrawListWriter:
    """Tests for DrawListWriter class."""

    def test_init(self):
        """Test DrawListWriter initialization."""
        path = Path("out.json")
        writer = DrawListWriter(path)
        assert writer._output_path == path

    def test_write_surface(self, tmp_path):
        """Test writing a recording surface."""
        surface = RecordingSurface()
        surface.circle(Point(10, 20), 5.0, WHITE)
        path = tmp_path / "out.json"

        DrawListWriter(path).write(surface, metadata={"layer": "top"})

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"] == {"layer": "top"}
        assert data["ops"] == [
            {"op": "circle", "center": [10, 20], "radius": 5.0, "color": "#ffffffff"}
        ]

    def test_write_op_sequence(self, tmp_path):
        """Test writing a plain list of operations without metadata."""
        path = tmp_path / "out.json"
        DrawListWriter(path).write([CircleOp(Point(0, 0), 1.0, WHITE)])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"] == {}
        assert len(data["ops"]) == 1

    def test_write_failure(self, tmp_path):
        """Test an OS error is reported as DocumentSaveError."""
        writer = DrawListWriter(tmp_path / "out.json")
        with patch.object(Path, "write_text", side_effect=OSError("disk full")):
            with pytest.raises(DocumentSaveError, match="disk full"):
                writer.write([])

    def test_get_draw_list_path(self):
        """Test default output path generation."""
        assert DrawListWriter.get_draw_list_path(Path("boards/top_copper.json")) == Path(
            "boards/top_copper-drawlist.json"
        )
