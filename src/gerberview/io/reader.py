"""Command document reader.

This module provides the CommandReader class for loading parsed command
documents (JSON, ``{"commands": [...]}``) into domain commands.
"""

import json
from pathlib import Path
from typing import Any

from gerberview.domain import Command, ImageTransform, SetImageTransform, commands_from_dict
from gerberview.exceptions import DocumentLoadError, ParseFailure


class CommandReader:
    """Loads a command document and deserializes its commands.

    Example:
        with CommandReader(Path("top_copper.json")) as reader:
            layer = build_layer(reader.commands(), reader.name)
    """

    def __init__(self, document_path: Path) -> None:
        """Initialize the command reader.

        Args:
            document_path: Path to the JSON command document
        """
        self._document_path = document_path
        self._document: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        """Document name, taken from the file name."""
        return self._document_path.stem

    def load(self) -> None:
        """Load the document file.

        Raises:
            DocumentLoadError: If the file is missing, unreadable or not a
                JSON object with a ``commands`` list
        """
        if not self._document_path.exists():
            raise DocumentLoadError(str(self._document_path), "file not found")

        try:
            data = json.loads(self._document_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentLoadError(str(self._document_path), str(e)) from e

        if not isinstance(data, dict) or not isinstance(data.get("commands"), list):
            raise DocumentLoadError(
                str(self._document_path), "expected an object with a 'commands' list"
            )

        self._document = data

    @property
    def document(self) -> dict[str, Any]:
        """Raw document dictionary.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._document is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return self._document

    @property
    def command_count(self) -> int:
        return len(self.document["commands"])

    def commands(self) -> list[Command]:
        """Deserialize the document's commands.

        Raises:
            ParseFailure: If a command is malformed
            RuntimeError: If the document has not been loaded yet
        """
        try:
            return commands_from_dict(self.document)
        except (KeyError, ValueError, TypeError) as e:
            raise ParseFailure(self.name, f"malformed command: {e!r}") from e

    def image_transform(self) -> ImageTransform:
        """The document's image transform (the last one wins), identity if none."""
        transform = ImageTransform()
        for command in self.commands():
            if isinstance(command, SetImageTransform):
                transform = command.image_transform
        return transform

    def close(self) -> None:
        """Release the loaded document."""
        self._document = None

    def __enter__(self) -> "CommandReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
