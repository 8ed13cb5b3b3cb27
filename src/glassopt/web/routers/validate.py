"""Job validation endpoints."""

from fastapi import APIRouter

from glassopt.application.config import load_config_from_dict, validate_config
from glassopt.web.schemas.requests import ConfigValidateRequest
from glassopt.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate a job document without optimizing it.

    Schema errors are raised as ConfigError and reported with status 422;
    semantic problems are returned in the body.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[
            {"message": e.message, "path": e.path, "value": e.value}
            for e in result.errors
        ],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
