"""Configuration settings for gerberview."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RenderConfiguration(BaseModel):
    """Per-render options, passed explicitly to the renderer.

    Frozen so several views can render concurrently with different settings
    without sharing mutable state.
    """

    model_config = ConfigDict(frozen=True)

    use_unique_shape_colors: bool = Field(
        default=False,
        description="Give each shape a unique colour",
    )
    use_shape_numbering: bool = Field(
        default=False,
        description="Draw the shape index at the centre of each shape",
    )
    use_vertex_numbering: bool = Field(
        default=False,
        description="Draw the vertex index at each polygon vertex",
    )
    use_shape_bboxes: bool = Field(
        default=False,
        description="Draw a bounding box outline for each shape",
    )
    clear_color: tuple[int, int, int, int] = Field(
        default=(0, 0, 0, 255),
        description="RGBA colour used for subtract exposures",
    )


class GeometryConfig(BaseModel):
    """Configuration for procedural geometry generated at build time."""

    arc_segments_per_turn: int = Field(
        default=64,
        ge=8,
        le=1024,
        description="Segments used for a full turn; arcs get a proportional share",
    )
    arc_min_segments: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Minimum segments for any arc, however small its sweep",
    )


class ViewConfig(BaseModel):
    """Configuration for view fitting, interaction and animation."""

    zoom_factor: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description="Fraction of the viewport the fitted content may occupy",
    )
    zoom_step: float = Field(
        default=1.1,
        gt=1.0,
        le=4.0,
        description="Zoom multiplier per scroll notch",
    )
    rotation_speed_deg_per_sec: float = Field(
        default=0.0,
        description="Placement rotation animation speed",
    )
    marker_radius: float = Field(
        default=2.5,
        ge=0.0,
        description="Radius of origin/offset markers, in shape units",
    )
    show_layer_bbox: bool = Field(
        default=False,
        description="Draw the transformed layer outline and its axis-aligned box",
    )
    show_markers: bool = Field(
        default=False,
        description="Draw the placement origin and offset markers",
    )


class PlacementConfig(BaseModel):
    """User placement of a layer; see GerberTransform."""

    rotation_degrees: float = Field(default=0.0, description="Rotation about the origin")
    mirror_x: bool = Field(default=False, description="Mirror X about the origin")
    mirror_y: bool = Field(default=False, description="Mirror Y about the origin")
    origin: tuple[float, float] = Field(
        default=(0.0, 0.0), description="Pivot for rotation and mirroring"
    )
    offset: tuple[float, float] = Field(default=(0.0, 0.0), description="Final translation")
    scale: float = Field(default=1.0, ge=0.0, description="Uniform scale factor")


class ProcessingConfig(BaseModel):
    """Configuration for building documents."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GerberViewSettings(BaseModel):
    """Main application settings."""

    render: RenderConfiguration = Field(default_factory=RenderConfiguration)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GerberViewSettings:
    """Get default application settings."""
    return GerberViewSettings()
