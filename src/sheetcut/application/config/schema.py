"""Pydantic models for cut plan configuration files.

Configuration files are JSON documents with a sheet description, optional
packing options and the list of pieces to cut:

    {
        "schema_version": "1.0",
        "sheet": {"width": 2440, "height": 1220, "kerf": 3.175},
        "pieces": [
            {"id": "side", "width": 610, "height": 876, "quantity": 2,
             "orientation": "vertical", "material": "18mm plywood"}
        ]
    }
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from sheetcut.domain.value_objects import (
    DEFAULT_KERF,
    DEFAULT_SHEET_HEIGHT,
    DEFAULT_SHEET_WIDTH,
    DEFAULT_TRIM_MARGIN,
    OrientationConstraint,
)

SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfigSchema(BaseModel):
    """Sheet dimensions and cutting allowances.

    Attributes:
        width: Sheet width in millimeters (x-axis, grain direction).
        height: Sheet height in millimeters.
        kerf: Saw blade kerf in millimeters.
        trim_margin: Material trimmed from each edge in millimeters.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    width: float = Field(
        default=DEFAULT_SHEET_WIDTH, gt=0, description="Sheet width in mm"
    )
    height: float = Field(
        default=DEFAULT_SHEET_HEIGHT, gt=0, description="Sheet height in mm"
    )
    kerf: float = Field(default=DEFAULT_KERF, ge=0, description="Saw kerf in mm")
    trim_margin: float = Field(
        default=DEFAULT_TRIM_MARGIN, ge=0, description="Edge trim in mm"
    )

    @model_validator(mode="after")
    def validate_usable_area(self) -> "SheetConfigSchema":
        """Ensure the trim margin leaves a usable area."""
        if self.width <= 2 * self.trim_margin or self.height <= 2 * self.trim_margin:
            raise ValueError(
                f"trim_margin {self.trim_margin} leaves no usable area on a "
                f"{self.width}x{self.height} sheet"
            )
        return self


class PackingConfigSchema(BaseModel):
    """Packing run options.

    Attributes:
        group_by_material: Pack each material tag onto its own sheets.
        min_offcut_size: Smallest free rectangle side reported as an offcut.
        max_placements: Optional cap on instances processed per run.
        time_limit: Optional wall-clock limit per run, in seconds.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    group_by_material: bool = Field(
        default=True, description="Pack each material group separately"
    )
    min_offcut_size: float = Field(
        default=100.0, ge=0, description="Minimum offcut dimension in mm"
    )
    max_placements: int | None = Field(
        default=None, ge=0, description="Maximum instances placed per run"
    )
    time_limit: float | None = Field(
        default=None, gt=0, description="Time limit per run in seconds"
    )


class PieceConfigSchema(BaseModel):
    """A piece to cut.

    Attributes:
        id: Unique piece identifier.
        label: Display name (defaults to the id).
        width: Piece width in millimeters.
        height: Piece height in millimeters.
        quantity: Number of identical pieces.
        orientation: fixed_along_width, fixed_along_height or unconstrained.
            Grain aliases horizontal, vertical and either are accepted.
        material: Material tag used for grouping.
        metadata: Free-form data passed through to the output.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    id: str = Field(..., min_length=1, description="Piece identifier")
    label: str = Field(default="", description="Display name")
    width: float = Field(..., gt=0, description="Piece width in mm")
    height: float = Field(..., gt=0, description="Piece height in mm")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    orientation: OrientationConstraint = Field(
        default=OrientationConstraint.UNCONSTRAINED,
        description="Orientation constraint",
    )
    material: str = Field(default="", description="Material tag")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Opaque metadata"
    )

    @field_validator("orientation", mode="before")
    @classmethod
    def parse_orientation(cls, v: Any) -> Any:
        """Accept grain direction aliases for the orientation constraint."""
        if isinstance(v, str):
            try:
                return OrientationConstraint.parse(v)
            except ValueError:
                # Leave it to the enum validator to report allowed values.
                return v
        return v


class CutPlanConfiguration(BaseModel):
    """Root configuration model.

    Attributes:
        schema_version: Configuration schema version.
        sheet: Sheet settings.
        packing: Packing options.
        pieces: Pieces to cut.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., description="Configuration schema version")
    sheet: SheetConfigSchema = Field(default_factory=SheetConfigSchema)
    packing: PackingConfigSchema = Field(default_factory=PackingConfigSchema)
    pieces: list[PieceConfigSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported: {supported}"
            )
        return v
