"""Exporter framework for cut plans.

Registered exporters:
- json: structured dump of every group, sheet, placement and free rectangle
- csv: one row per placed piece

Usage:
    from sheetcut.infrastructure.exporters import ExporterRegistry, ExportManager

    formats = ExporterRegistry.available_formats()
    files = ExportManager(Path("out")).export_all(formats, plan, "kitchen")
"""

from sheetcut.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from sheetcut.infrastructure.exporters.csv_export import CsvPlanExporter
from sheetcut.infrastructure.exporters.json_export import (
    JsonPlanExporter,
    plan_to_dict,
    result_to_dict,
)

__all__ = [
    "CsvPlanExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonPlanExporter",
    "plan_to_dict",
    "result_to_dict",
]
