"""Document I/O layer for gerberview.

This module handles reading parsed command documents and writing draw
lists. It keeps file formats out of the core pipeline.

Key responsibilities:
- Load JSON command documents into domain commands
- Export recorded draw operations as JSON

Key classes:
- CommandReader: Load command documents
- DrawListWriter: Save recorded draw lists
"""

from gerberview.io.reader import CommandReader
from gerberview.io.writer import DrawListWriter

__all__ = [
    "CommandReader",
    "DrawListWriter",
]
