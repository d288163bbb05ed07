"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A piece placed on a sheet."""

    piece_id: str = Field(..., description="Id of the piece definition")
    instance_index: int = Field(..., description="Zero-based repeat index")
    label: str = Field(..., description="Display label of the placed piece")
    x: float = Field(..., description="Left edge from the sheet origin")
    y: float = Field(..., description="Top edge from the sheet origin")
    width: float = Field(..., description="Placed width along the sheet width")
    height: float = Field(..., description="Placed height along the sheet height")
    rotated: bool = Field(..., description="Whether the piece was turned 90 degrees")
    material: str = Field(default="", description="Material tag of the piece")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Metadata passed through from the input piece"
    )


class FreeRectSchema(BaseModel):
    """Unused region left on a sheet."""

    x: float
    y: float
    width: float
    height: float


class SheetLayoutSchema(BaseModel):
    """One sheet and everything placed on it."""

    sheet_index: int = Field(..., description="Zero-based sheet number")
    placements: list[PlacementSchema] = Field(default_factory=list)
    free_rects: list[FreeRectSchema] = Field(default_factory=list)
    utilization_percentage: float = Field(..., description="Used area of the sheet")


class UnplacedPieceSchema(BaseModel):
    """A piece instance that was not placed."""

    piece_id: str
    instance_index: int
    label: str
    reason: str = Field(..., description="too_large or budget_exhausted")


class MaterialGroupSchema(BaseModel):
    """Packing result for one material."""

    material: str = Field(..., description="Material name, empty when ungrouped")
    sheets: list[SheetLayoutSchema] = Field(default_factory=list)
    unplaced: list[UnplacedPieceSchema] = Field(default_factory=list)
    overall_utilization_percentage: float
    truncated: bool = False


class PlanSummarySchema(BaseModel):
    """Totals across all material groups."""

    total_sheets: int
    total_pieces_placed: int
    overall_utilization_percentage: float
    sheets_by_material: dict[str, int] = Field(default_factory=dict)
    unplaced_labels: list[str] = Field(default_factory=list)
    truncated: bool = False


class CutPlanResponseSchema(BaseModel):
    """Response for cut plan optimization."""

    is_valid: bool = Field(..., description="Whether optimization succeeded")
    warnings: list[str] = Field(default_factory=list, description="Warnings")
    summary: PlanSummarySchema
    groups: list[MaterialGroupSchema] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Error body returned by the exception handlers."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Machine readable error category")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
