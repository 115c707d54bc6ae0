"""Domain error -> HTTPException mapping shared by the API routes."""
import logging

from fastapi import HTTPException

from nutriplan.domain.errors import (
    CatalogExhausted,
    InvalidPlanLength,
    InvalidProfile,
    InvalidSwap,
    NutriplanError,
    UnitMismatch,
)

logger = logging.getLogger("nutriplan_app")

_STATUS = (
    (InvalidProfile, 422),
    (InvalidPlanLength, 422),
    (InvalidSwap, 422),
    (CatalogExhausted, 409),
    (UnitMismatch, 409),
)


def to_http_exception(exc: NutriplanError) -> HTTPException:
    for error_type, status in _STATUS:
        if isinstance(exc, error_type):
            logger.info("Request rejected (%d): %s", status, exc)
            return HTTPException(status_code=status, detail=str(exc))
    logger.error("Unexpected domain error: %s", exc)
    return HTTPException(status_code=500, detail=str(exc))
