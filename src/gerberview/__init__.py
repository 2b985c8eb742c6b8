"""GerberView - Render PCB artwork layers into screen-space draw calls.

GerberView takes the primitives of a parsed PCB artwork document (circles,
rectangles, lines, arcs and polygons), places them with a user transform
(rotation, mirroring, offset, scale) on top of the document's own image
transform, fits them into a viewport and emits draw calls for a rendering
surface.

Example:
    $ gerberview render top_copper.json --rotation 45 -o frame.json
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
