"""Cut plan optimization endpoints."""

from fastapi import APIRouter

from sheetcut.application.config import load_config_from_dict, merge_config_with_cli
from sheetcut.infrastructure.bin_packing import CutPlan, OptimizationResult, SheetLayout
from sheetcut.web.dependencies import OptimizeCommandDep
from sheetcut.web.exceptions import CutPlanRejectedError
from sheetcut.web.schemas.requests import OptimizeRequest
from sheetcut.web.schemas.responses import (
    CutPlanResponseSchema,
    FreeRectSchema,
    MaterialGroupSchema,
    PlacementSchema,
    PlanSummarySchema,
    SheetLayoutSchema,
    UnplacedPieceSchema,
)

router = APIRouter(prefix="/optimize", tags=["optimize"])


def _layout_to_schema(layout: SheetLayout) -> SheetLayoutSchema:
    return SheetLayoutSchema(
        sheet_index=layout.sheet_index,
        placements=[
            PlacementSchema(
                piece_id=p.piece_id,
                instance_index=p.instance_index,
                label=p.label,
                x=p.x,
                y=p.y,
                width=p.width,
                height=p.height,
                rotated=p.rotated,
                material=p.material,
                metadata=p.metadata,
            )
            for p in layout.placements
        ],
        free_rects=[
            FreeRectSchema(x=r.x, y=r.y, width=r.width, height=r.height)
            for r in layout.free_rects
        ],
        utilization_percentage=layout.utilization_percentage,
    )


def _group_to_schema(material: str, result: OptimizationResult) -> MaterialGroupSchema:
    return MaterialGroupSchema(
        material=material,
        sheets=[_layout_to_schema(layout) for layout in result.layouts],
        unplaced=[
            UnplacedPieceSchema(
                piece_id=u.piece_id,
                instance_index=u.instance_index,
                label=u.label,
                reason=u.reason.value,
            )
            for u in result.unplaced
        ],
        overall_utilization_percentage=result.overall_utilization_percentage,
        truncated=result.truncated,
    )


def _plan_to_schema(plan: CutPlan, warnings: list[str]) -> CutPlanResponseSchema:
    """Convert a CutPlan to the response schema."""
    return CutPlanResponseSchema(
        is_valid=True,
        warnings=warnings,
        summary=PlanSummarySchema(
            total_sheets=plan.total_sheets,
            total_pieces_placed=plan.total_pieces_placed,
            overall_utilization_percentage=plan.overall_utilization_percentage,
            sheets_by_material=plan.sheets_by_material,
            unplaced_labels=plan.unplaced_labels,
            truncated=plan.truncated,
        ),
        groups=[
            _group_to_schema(material, result)
            for material, result in plan.results.items()
        ],
    )


@router.post("", response_model=CutPlanResponseSchema)
async def optimize_cut_plan(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
) -> CutPlanResponseSchema:
    """Optimize sheet layouts for a cut plan configuration.

    Args:
        request: Request containing the configuration and optional overrides.
        command: Injected OptimizeCutPlanCommand.

    Returns:
        The plan summary and per-material sheet layouts.

    Raises:
        ConfigError: If the configuration or an override is invalid.
        CutPlanRejectedError: If the configuration fails cross-field checks.
    """
    config = load_config_from_dict(request.config)
    config = merge_config_with_cli(
        config,
        sheet_width=request.sheet_width,
        sheet_height=request.sheet_height,
        kerf=request.kerf,
        trim_margin=request.trim_margin,
        max_placements=request.max_placements,
        time_limit=request.time_limit,
    )

    output = command.execute(config)
    if not output.is_valid:
        raise CutPlanRejectedError(output.errors)

    return _plan_to_schema(output.plan, output.warnings)
