"""Logging utilities for gerberview."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class BuildStats:
    """Statistics from a document build run."""

    built_count: int = 0
    error_count: int = 0
    primitive_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    document_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_document_time_ms(self) -> float | None:
        if not self.document_timings_ms:
            return None
        return sum(self.document_timings_ms) / len(self.document_timings_ms)


@dataclass
class RenderStats:
    """Statistics from painting one layer."""

    drawn_count: int = 0
    skipped_count: int = 0
    fast_path_rects: int = 0
    rotated_rects: int = 0
    meshes: int = 0
    skipped: list[tuple[int, str]] = field(default_factory=list)

    def record_skip(self, index: int, reason: str) -> None:
        self.skipped_count += 1
        self.skipped.append((index, reason))


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("gerberview")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking per-layer render outcomes."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger

    def log_primitive_skipped(self, layer: str, index: int, reason: str) -> None:
        """Log a primitive that produced no draw operations."""
        self._logger.debug("Primitive skipped", layer=layer, index=index, reason=reason)

    def log_layer_painted(self, layer: str, stats: RenderStats, duration_ms: float) -> None:
        """Log a completed layer paint."""
        self._logger.debug(
            "Layer painted",
            layer=layer,
            drawn=stats.drawn_count,
            skipped=stats.skipped_count,
            meshes=stats.meshes,
            duration_ms=round(duration_ms, 2),
        )

    def log_reload(self, layer: str, primitive_count: int) -> None:
        """Log a successful layer swap."""
        self._logger.info("Layer reloaded", layer=layer, primitives=primitive_count)

    def log_reload_failed(self, layer: str, error: Exception) -> None:
        """Log a rejected rebuild; the previous layer stays in place."""
        self._logger.error(
            "Layer rebuild failed, keeping previous layer",
            layer=layer,
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_view_fitted(self, layer: str, scale: float, translation: tuple[float, float]) -> None:
        self._logger.debug(
            "View fitted",
            layer=layer,
            scale=round(scale, 6),
            translation=[round(v, 3) for v in translation],
        )
