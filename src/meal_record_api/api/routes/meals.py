"""Meal record API routes.

Estimates the nutrients of a food for a given quantity and unit.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from meal_record_api.api.dependencies import PipelineDep, verify_api_key
from meal_record_api.models.meal import ErrorResponse, NutritionEstimate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "",
    dependencies=[Depends(verify_api_key)],
    responses={
        200: {"description": "Nutrition estimate", "model": NutritionEstimate},
        400: {"description": "Invalid API key or request body", "model": ErrorResponse},
        500: {"description": "Model reply unusable or unexpected provider error", "model": ErrorResponse},
        503: {"description": "Model provider unavailable", "model": ErrorResponse},
        510: {"description": "The input is not a food the model can estimate", "model": ErrorResponse},
    },
    summary="Estimate nutrients of a meal",
    description="""
Body: `{"foodName": str, "quantity": int > 0, "unit": 0-4}` where unit is
0 servings, 1 pieces, 2 plates, 3 grams, 4 milliliters.

Requires the `x-api-key` header.
""",
)
async def record_meal(request: Request, pipeline: PipelineDep) -> JSONResponse:
    """Run the nutrition pipeline on the raw request body."""
    body = await request.body()
    outcome = await pipeline.run(body)

    logger.info(
        f"Meal request finished with {outcome.status_code}",
        extra={"status_code": outcome.status_code, "outcome": type(outcome).__name__},
    )

    return JSONResponse(status_code=outcome.status_code, content=outcome.to_response())
