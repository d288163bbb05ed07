"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sheetcut.infrastructure.bin_packing import CutPlan


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all cut plan exporters.

    Attributes:
        format_name: Registry name of the format (e.g. "json", "csv").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, plan: CutPlan, path: Path) -> None:
        """Write the plan to a file."""
        ...

    @abstractmethod
    def export_string(self, plan: CutPlan) -> str:
        """Render the plan in this format."""
        ...


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves with the @ExporterRegistry.register
    decorator:

        @ExporterRegistry.register("json")
        class JsonPlanExporter:
            format_name = "json"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Decorator registering an exporter class under format_name."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    "Overwriting existing exporter for format '%s'", format_name
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(
                "Registered exporter '%s': %s", format_name, exporter_class.__name__
            )
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up an exporter class.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes a cut plan to one or more formats in an output directory.

    Attributes:
        output_dir: Directory where exported files are written.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        plan: CutPlan,
        project_name: str = "cutplan",
    ) -> dict[str, Path]:
        """Export the plan to every requested format.

        Files are named {project_name}_{format}.{ext}.

        Returns:
            Mapping of format name to written file path.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, Path] = {}
        for format_name in formats:
            exporter = ExporterRegistry.get(format_name)()
            filepath = self.output_dir / f"{project_name}_{format_name}.{exporter.file_extension}"

            logger.info("Exporting to %s: %s", format_name, filepath)
            exporter.export(plan, filepath)
            results[format_name] = filepath

        return results
