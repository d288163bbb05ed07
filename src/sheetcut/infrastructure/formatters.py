"""Plain-text formatting of cut plans."""

from __future__ import annotations

from sheetcut.infrastructure.bin_packing import CutPlan, OptimizationResult, SheetLayout


class CutPlanFormatter:
    """Formats a CutPlan as a plain-text report.

    One block per material group: a sheet summary table, the placement
    list of every sheet and the pieces that could not be placed.
    """

    def __init__(self, min_offcut_size: float | None = None) -> None:
        """Initialize formatter.

        Args:
            min_offcut_size: When set, list free rectangles whose shorter
                side is at least this size as reusable offcuts.
        """
        self._min_offcut_size = min_offcut_size

    def format(self, plan: CutPlan) -> str:
        if not plan.results:
            return "No pieces to cut."

        lines: list[str] = []
        for material, result in plan.results.items():
            lines.extend(self._format_group(material, result))
            lines.append("")

        lines.append("=" * 70)
        lines.append(
            f"Total: {plan.total_sheets} sheet(s), "
            f"{plan.total_pieces_placed} piece(s) placed, "
            f"{plan.overall_utilization_percentage:.1f}% utilization"
        )
        if plan.unplaced_labels:
            lines.append(f"Unplaced: {len(plan.unplaced_labels)} piece(s)")
        return "\n".join(lines)

    def _format_group(self, material: str, result: OptimizationResult) -> list[str]:
        settings = result.settings
        title = f"CUT PLAN - {material}" if material else "CUT PLAN"
        lines = [
            title,
            "=" * 70,
            f"Sheet: {settings.width:g} x {settings.height:g}  "
            f"kerf {settings.kerf:g}  trim {settings.trim_margin:g}",
            "",
            f"{'Sheet':<8}{'Pieces':>8}{'Used area':>16}{'Utilization':>14}",
            "-" * 46,
        ]
        for layout in result.layouts:
            lines.append(
                f"{layout.sheet_index + 1:<8}{layout.piece_count:>8}"
                f"{layout.used_area:>16.0f}{layout.utilization_percentage:>13.1f}%"
            )
        lines.append("-" * 46)
        lines.append(
            f"{'Total':<8}{result.total_pieces_placed:>8}"
            f"{result.used_area:>16.0f}{result.overall_utilization_percentage:>13.1f}%"
        )

        for layout in result.layouts:
            lines.append("")
            lines.extend(self._format_layout(layout))

        if result.unplaced:
            lines.append("")
            lines.append("UNPLACED")
            lines.append("-" * 46)
            for label in result.unplaced_labels:
                lines.append(f"  {label}")
        return lines

    def _format_layout(self, layout: SheetLayout) -> list[str]:
        lines = [
            f"Sheet {layout.sheet_index + 1}",
            f"  {'Piece':<28}{'X':>8}{'Y':>8}{'W x H':>16}",
        ]
        for placed in layout.placements:
            size = f"{placed.width:g} x {placed.height:g}"
            marker = " (rotated)" if placed.rotated else ""
            lines.append(
                f"  {placed.label:<28}{placed.x:>8.1f}{placed.y:>8.1f}{size:>16}{marker}"
            )

        if self._min_offcut_size is not None:
            offcuts = layout.offcuts(self._min_offcut_size)
            if offcuts:
                lines.append("  Offcuts:")
                for offcut in offcuts:
                    lines.append(
                        f"    {offcut.width:g} x {offcut.height:g} "
                        f"at ({offcut.rect.x:g}, {offcut.rect.y:g})"
                    )
        return lines
