"""JSON exporter for cut plans.

The document mirrors the in-memory result: one entry per material group
with its settings, sheets (placements and free rectangles) and unplaced
pieces, plus plan-wide totals.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, ClassVar

from sheetcut.domain.value_objects import FreeRect, SheetSettings
from sheetcut.infrastructure.bin_packing import (
    CutPlan,
    OptimizationResult,
    PlacedPiece,
    SheetLayout,
)
from sheetcut.infrastructure.exporters.base import ExporterRegistry

logger = logging.getLogger(__name__)


def settings_to_dict(settings: SheetSettings) -> dict[str, float]:
    return {
        "width": settings.width,
        "height": settings.height,
        "kerf": settings.kerf,
        "trim_margin": settings.trim_margin,
    }


def placement_to_dict(placed: PlacedPiece) -> dict[str, Any]:
    return {
        "piece_id": placed.piece_id,
        "instance_index": placed.instance_index,
        "label": placed.label,
        "x": placed.x,
        "y": placed.y,
        "width": placed.width,
        "height": placed.height,
        "sheet_index": placed.sheet_index,
        "rotated": placed.rotated,
        "orientation": placed.instance.orientation.value,
        "material": placed.material,
        "metadata": placed.metadata,
    }


def free_rect_to_dict(rect: FreeRect) -> dict[str, float]:
    return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}


def layout_to_dict(layout: SheetLayout) -> dict[str, Any]:
    return {
        "sheet_index": layout.sheet_index,
        "placements": [placement_to_dict(p) for p in layout.placements],
        "free_rects": [free_rect_to_dict(r) for r in layout.free_rects],
        "used_area": layout.used_area,
        "total_area": layout.total_area,
        "utilization_percentage": layout.utilization_percentage,
    }


def result_to_dict(result: OptimizationResult) -> dict[str, Any]:
    """Serialize one packing run to JSON-compatible data."""
    return {
        "settings": settings_to_dict(result.settings),
        "sheets": [layout_to_dict(layout) for layout in result.layouts],
        "total_sheets": result.total_sheets,
        "total_pieces_placed": result.total_pieces_placed,
        "overall_utilization_percentage": result.overall_utilization_percentage,
        "unplaced": [
            {
                "piece_id": u.piece_id,
                "instance_index": u.instance_index,
                "label": u.label,
                "reason": u.reason.value,
            }
            for u in result.unplaced
        ],
        "unplaced_labels": result.unplaced_labels,
        "truncated": result.truncated,
    }


def plan_to_dict(plan: CutPlan) -> dict[str, Any]:
    """Serialize a whole cut plan to JSON-compatible data."""
    return {
        "groups": [
            {"material": material, **result_to_dict(result)}
            for material, result in plan.results.items()
        ],
        "summary": {
            "total_sheets": plan.total_sheets,
            "total_pieces_placed": plan.total_pieces_placed,
            "overall_utilization_percentage": plan.overall_utilization_percentage,
            "sheets_by_material": plan.sheets_by_material,
            "unplaced_labels": plan.unplaced_labels,
            "truncated": plan.truncated,
        },
    }


@ExporterRegistry.register("json")
class JsonPlanExporter:
    """Exports a cut plan as an indented JSON document."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, plan: CutPlan, path: Path) -> None:
        path.write_text(self.export_string(plan), encoding="utf-8")
        logger.info("Exported JSON cut plan to %s", path)

    def export_string(self, plan: CutPlan) -> str:
        return json.dumps(plan_to_dict(plan), indent=self.indent)
