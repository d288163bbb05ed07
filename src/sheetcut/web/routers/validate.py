"""Configuration validation endpoints."""

from fastapi import APIRouter

from sheetcut.application.config import load_config_from_dict, validate_config
from sheetcut.web.schemas.requests import ConfigValidateRequest
from sheetcut.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate a cut plan configuration without optimizing.

    Schema errors surface as a 422 through the ConfigError handler.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
