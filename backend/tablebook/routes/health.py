"""
TableBook Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the connection pool with SELECT 1 and reports the result along
       with the version string captured by the startup diagnostic.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body carries the verdict)
"""

import time

from fastapi import APIRouter, Depends

from tablebook import __version__
from tablebook.database import Database, get_database
from tablebook.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: Database = Depends(get_database)) -> HealthResponse:
    connected = await db.ping()

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
        database_version=db.server_version,
    )
