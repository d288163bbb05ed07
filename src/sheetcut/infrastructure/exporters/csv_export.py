"""CSV exporter listing every placement of a cut plan."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import ClassVar

from sheetcut.infrastructure.bin_packing import CutPlan
from sheetcut.infrastructure.exporters.base import ExporterRegistry

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "material",
    "sheet",
    "piece_id",
    "instance",
    "label",
    "x",
    "y",
    "width",
    "height",
    "rotated",
)


@ExporterRegistry.register("csv")
class CsvPlanExporter:
    """One row per placed piece; sheets and instances are 1-based."""

    format_name: ClassVar[str] = "csv"
    file_extension: ClassVar[str] = "csv"

    def export(self, plan: CutPlan, path: Path) -> None:
        path.write_text(self.export_string(plan), encoding="utf-8", newline="")
        logger.info("Exported CSV cut plan to %s", path)

    def export_string(self, plan: CutPlan) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)

        for material, result in plan.results.items():
            for placed in result.placements:
                writer.writerow(
                    [
                        material,
                        placed.sheet_index + 1,
                        placed.piece_id,
                        placed.instance_index + 1,
                        placed.label,
                        f"{placed.x:g}",
                        f"{placed.y:g}",
                        f"{placed.width:g}",
                        f"{placed.height:g}",
                        "yes" if placed.rotated else "no",
                    ]
                )

        return output.getvalue()
