"""Conversion of configuration models into domain objects."""

from sheetcut.application.config.schema import (
    CutPlanConfiguration,
    PieceConfigSchema,
    SheetConfigSchema,
)
from sheetcut.domain.value_objects import Piece, SheetSettings
from sheetcut.infrastructure.bin_packing import BinPackingConfig, PackingBudget


def config_to_sheet_settings(sheet: SheetConfigSchema) -> SheetSettings:
    """Convert the sheet section to SheetSettings.

    Raises:
        SheetConfigurationError: If the settings leave no usable area.
    """
    return SheetSettings(
        width=sheet.width,
        height=sheet.height,
        kerf=sheet.kerf,
        trim_margin=sheet.trim_margin,
    )


def config_to_piece(piece: PieceConfigSchema) -> Piece:
    return Piece(
        piece_id=piece.id,
        width=piece.width,
        height=piece.height,
        quantity=piece.quantity,
        orientation=piece.orientation,
        label=piece.label,
        material=piece.material,
        metadata=dict(piece.metadata) if piece.metadata is not None else None,
    )


def config_to_pieces(config: CutPlanConfiguration) -> list[Piece]:
    """Convert all configured pieces, preserving their order."""
    return [config_to_piece(piece) for piece in config.pieces]


def config_to_bin_packing(config: CutPlanConfiguration) -> BinPackingConfig:
    """Build the BinPackingConfig for a configuration.

    Raises:
        SheetConfigurationError: If the sheet settings are unusable.
    """
    packing = config.packing
    return BinPackingConfig(
        sheet=config_to_sheet_settings(config.sheet),
        budget=PackingBudget(
            max_placements=packing.max_placements,
            time_limit=packing.time_limit,
        ),
        group_by_material=packing.group_by_material,
        min_offcut_size=packing.min_offcut_size,
    )
