"""Draw list writer.

This module provides the DrawListWriter class for exporting the draw calls
recorded by a RecordingSurface as JSON, e.g. for a rasterizer running in
another process or for regression snapshots.
"""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gerberview.core.surface import DrawOp, RecordingSurface
from gerberview.exceptions import DocumentSaveError


class DrawListWriter:
    """Writes recorded draw operations to a JSON file.

    Example:
        writer = DrawListWriter(Path("frame.json"))
        writer.write(surface, metadata={"layer": "top"})
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the draw list writer.

        Args:
            output_path: Path where the draw list will be saved
        """
        self._output_path = output_path

    def write(
        self,
        ops: RecordingSurface | Sequence[DrawOp],
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Save the draw list.

        Args:
            ops: A recording surface or its recorded operations
            metadata: Optional extra information stored alongside the ops

        Raises:
            DocumentSaveError: If the file cannot be written
        """
        if isinstance(ops, RecordingSurface):
            ops = ops.ops

        data = {
            "metadata": metadata or {},
            "ops": [op.to_dict() for op in ops],
        }

        try:
            self._output_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            raise DocumentSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_draw_list_path(input_path: Path) -> Path:
        """Generate the default output path for a document.

        Converts: top_copper.json -> top_copper-drawlist.json

        Args:
            input_path: Command document path

        Returns:
            Path with -drawlist suffix before the extension
        """
        return input_path.parent / f"{input_path.stem}-drawlist.json"
