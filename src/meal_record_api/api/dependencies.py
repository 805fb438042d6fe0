"""FastAPI dependency injection factories."""

import secrets
from typing import Annotated

from fastapi import Depends, Header, Request

from meal_record_api.core.config import Settings, get_settings
from meal_record_api.core.exceptions import InvalidAPIKeyError, ServiceNotReadyError
from meal_record_api.services.nutrition import NutritionPipeline


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def verify_api_key(
    settings: SettingsDep,
    x_api_key: Annotated[str | None, Header()] = None,
) -> None:
    """
    Check the shared-secret x-api-key header.

    Raises:
        InvalidAPIKeyError: If the header is missing or does not match
    """
    if not settings.api_key or not x_api_key:
        raise InvalidAPIKeyError()
    if not secrets.compare_digest(x_api_key.encode(), settings.api_key.encode()):
        raise InvalidAPIKeyError()


def get_pipeline(request: Request) -> NutritionPipeline:
    """
    Get the pipeline built by the application lifespan.

    Raises:
        ServiceNotReadyError: If the lifespan has not run
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise ServiceNotReadyError("Nutrition pipeline")
    return pipeline


PipelineDep = Annotated[NutritionPipeline, Depends(get_pipeline)]
