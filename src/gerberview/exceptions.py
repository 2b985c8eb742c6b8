"""Exception hierarchy for gerberview."""


class GerberViewError(Exception):
    """Base exception for all gerberview errors."""

    pass


class DocumentError(GerberViewError):
    """Errors related to loading or saving documents."""

    pass


class ParseFailure(DocumentError):
    """Malformed input reached the layer builder.

    Raised to the caller that triggered a (re)build; the previously built
    layer stays valid.
    """

    def __init__(self, document: str, reason: str) -> None:
        self.document = document
        self.reason = reason
        super().__init__(f"Failed to build document '{document}': {reason}")


class DocumentLoadError(DocumentError):
    """Error reading a command document from disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error writing a draw list to disk."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save draw list '{path}': {reason}")


class GeometryError(GerberViewError):
    """Errors in geometric calculations."""

    pass


class TessellationError(GeometryError):
    """A polygon ring could not be triangulated (e.g. self-intersecting)."""

    def __init__(self, vertex_count: int, reason: str) -> None:
        self.vertex_count = vertex_count
        self.reason = reason
        super().__init__(f"Tessellation of {vertex_count}-vertex ring failed: {reason}")
