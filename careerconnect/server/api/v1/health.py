"""
Health Check Endpoints.

Used by the deployment platform to verify the server and its database.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database import get_session
from careerconnect.core.logging_config import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server and its database.",
    response_description="Status object with the result of each check.",
)
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    Health check endpoint.

    Runs a trivial query against the database. The overall status is ``ok``
    only when every check passes.
    """
    checks = {}
    try:
        await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        checks["database"] = "error"
    status_value = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
    return {"status": status_value, "checks": checks}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    return {"version": "1.0.0", "schema_version": "v1"}
