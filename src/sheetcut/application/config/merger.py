"""Merging of CLI overrides into a loaded configuration.

Precedence is CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from pydantic import ValidationError as PydanticValidationError

from sheetcut.application.config.loader import (
    ConfigError,
    validation_details,
    validation_message,
)
from sheetcut.application.config.schema import (
    CutPlanConfiguration,
    PackingConfigSchema,
    SheetConfigSchema,
)


def merge_config_with_cli(
    config: CutPlanConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    kerf: float | None = None,
    trim_margin: float | None = None,
    max_placements: int | None = None,
    time_limit: float | None = None,
) -> CutPlanConfiguration:
    """Return a new configuration with CLI overrides applied.

    The merged sheet and packing sections are validated again.

    Raises:
        ConfigError: If an override produces an invalid configuration.

    Example:
        >>> merged = merge_config_with_cli(config, kerf=4.0)
        >>> merged.sheet.kerf
        4.0
    """
    sheet_overrides = {
        "width": sheet_width,
        "height": sheet_height,
        "kerf": kerf,
        "trim_margin": trim_margin,
    }
    packing_overrides = {
        "max_placements": max_placements,
        "time_limit": time_limit,
    }

    sheet_data = config.sheet.model_dump()
    sheet_data.update({k: v for k, v in sheet_overrides.items() if v is not None})

    packing_data = config.packing.model_dump()
    packing_data.update({k: v for k, v in packing_overrides.items() if v is not None})

    try:
        return CutPlanConfiguration(
            schema_version=config.schema_version,
            sheet=SheetConfigSchema.model_validate(sheet_data),
            packing=PackingConfigSchema.model_validate(packing_data),
            pieces=list(config.pieces),
        )
    except PydanticValidationError as e:
        details = validation_details(e)
        raise ConfigError(
            message=validation_message(details),
            error_type="validation",
            details=details,
        ) from e
