"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeRequest(BaseModel):
    """Request for optimizing a cut plan from a full configuration.

    The optional fields override the matching values of the configuration,
    the same way the CLI options do.
    """

    config: dict[str, Any] = Field(..., description="Full cut plan configuration JSON")
    sheet_width: float | None = Field(default=None, description="Sheet width override")
    sheet_height: float | None = Field(
        default=None, description="Sheet height override"
    )
    kerf: float | None = Field(default=None, description="Saw kerf override")
    trim_margin: float | None = Field(default=None, description="Trim margin override")
    max_placements: int | None = Field(
        default=None, description="Maximum number of pieces to place"
    )
    time_limit: float | None = Field(
        default=None, description="Packing time limit in seconds"
    )


class ConfigValidateRequest(BaseModel):
    """Request for validating a configuration."""

    config: dict[str, Any] = Field(..., description="Cut plan configuration JSON")
