"""Configuration loading, merging, conversion and validation."""

from sheetcut.application.config.adapter import (
    config_to_bin_packing,
    config_to_piece,
    config_to_pieces,
    config_to_sheet_settings,
)
from sheetcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from sheetcut.application.config.merger import merge_config_with_cli
from sheetcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    CutPlanConfiguration,
    PackingConfigSchema,
    PieceConfigSchema,
    SheetConfigSchema,
)
from sheetcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "CutPlanConfiguration",
    "PackingConfigSchema",
    "PieceConfigSchema",
    "SheetConfigSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_bin_packing",
    "config_to_piece",
    "config_to_pieces",
    "config_to_sheet_settings",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "validate_config",
]
