"""Parallel layer building.

This module builds several documents at once with a ProcessPoolExecutor,
for example every layer of a board. Each document is built in a worker
process and returned as an immutable Layer; the views that display them
never share mutable state.

Key components:
- build_document: Top-level picklable function for parallel execution
- DocumentProcessor: Orchestrates building a set of documents
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from gerberview.config import GeometryConfig, GerberViewSettings
from gerberview.core.builder import build_layer
from gerberview.domain import Layer, commands_from_dict
from gerberview.utils import BuildStats, configure_logging


def build_document(
    name: str,
    document_dict: dict[str, Any],
    geometry_config_dict: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a single document into a layer.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the command document, builds the layer and returns it.

    Args:
        name: Document name
        document_dict: Serialized commands (from commands_to_dict())
        geometry_config_dict: Serialized geometry configuration

    Returns:
        Dictionary containing either:
        - Success: {"layer": Layer, "primitive_count": int, "duration_ms": float}
        - Error: {"error": str, "name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        commands = commands_from_dict(document_dict)
        geometry_config = GeometryConfig(**(geometry_config_dict or {}))
        layer = build_layer(commands, name, geometry_config)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "layer": layer,
            "primitive_count": len(layer.primitives),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Report instead of raising so one bad document does not abort the batch
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "name": name,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class DocumentProcessor:
    """Builds a set of documents in parallel.

    Example:
        processor = DocumentProcessor(GerberViewSettings())
        layers, stats = processor.build_all({"top": top_dict, "bottom": bottom_dict})
    """

    def __init__(self, config: GerberViewSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Settings containing geometry, processing and logging config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def build_all(
        self,
        documents: dict[str, dict[str, Any]],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[dict[str, Layer], BuildStats]:
        """Build every document in worker processes.

        Args:
            documents: Serialized command documents by name
            max_workers: Maximum worker processes (None = config, then auto)
            progress_callback: Optional callback(completed, total, name, success)
                for progress updates

        Returns:
            Tuple of (layers by name, BuildStats). Failed documents are
            missing from the layers and listed in ``stats.errors``.

        Raises:
            KeyboardInterrupt: If building is cancelled by user
        """
        stats = BuildStats()
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        geometry_dict = self.config.geometry.model_dump()
        layers: dict[str, Layer] = {}

        self.logger.info(
            "Starting parallel build",
            document_count=len(documents),
            max_workers=max_workers,
        )

        total = len(documents)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for name, document_dict in documents.items():
                future = executor.submit(build_document, name, document_dict, geometry_dict)
                pending_futures[future] = name

            try:
                for future in as_completed(pending_futures):
                    name = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()

                        if "error" in result:
                            self._record_error(stats, name, result["error"], result.get("traceback"))
                        else:
                            success = True
                            layers[name] = result["layer"]
                            stats.built_count += 1
                            stats.primitive_count += result["primitive_count"]
                            stats.document_timings_ms.append(result.get("duration_ms", 0.0))

                            self.logger.debug(
                                "Document built",
                                document=name,
                                primitives=result["primitive_count"],
                                duration_ms=round(result.get("duration_ms", 0.0), 2),
                            )

                    except Exception as e:
                        # Executor-level error (e.g. a worker process died)
                        self._record_error(stats, name, str(e), traceback.format_exc())

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

        stats.end_time = time.time()

        self.logger.info(
            "Build complete",
            built=stats.built_count,
            errors=stats.error_count,
            primitives=stats.primitive_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return layers, stats

    def _record_error(
        self, stats: BuildStats, name: str, error: str, tb: str | None
    ) -> None:
        stats.error_count += 1
        stats.errors.append((name, error))
        self.logger.error("Document build failed", document=name, error=error, traceback=tb)
