"""Readiness probe for load balancers and container orchestrators."""
import logging
from typing import Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class ReadinessResponse(BaseModel):
    """Whether the service can handle requests, and why not."""

    status: Literal["ready", "unavailable"]
    database: Literal["up", "down"]


@router.get(
    "/health",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> ReadinessResponse:
    """
    Report readiness. Every endpoint except this one needs the database,
    so an unreachable database answers 503 and the instance should be taken
    out of rotation.
    """
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Readiness check could not reach the database")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="unavailable", database="down")

    return ReadinessResponse(status="ready", database="up")
