"""Pydantic schemas for the REST API."""

from sheetcut.web.schemas.requests import ConfigValidateRequest, OptimizeRequest
from sheetcut.web.schemas.responses import (
    CutPlanResponseSchema,
    ErrorResponseSchema,
    FreeRectSchema,
    MaterialGroupSchema,
    PlacementSchema,
    PlanSummarySchema,
    SheetLayoutSchema,
    UnplacedPieceSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "OptimizeRequest",
    # Responses
    "CutPlanResponseSchema",
    "ErrorResponseSchema",
    "FreeRectSchema",
    "MaterialGroupSchema",
    "PlacementSchema",
    "PlanSummarySchema",
    "SheetLayoutSchema",
    "UnplacedPieceSchema",
    "ValidationResultSchema",
]
