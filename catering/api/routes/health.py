"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from catering import __version__
from catering.application.dto.responses import HealthResponse, ProviderHealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from catering.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )

    except Exception as e:
        db_status = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )


@router.get("/payments", response_model=HealthResponse)
async def payments_health() -> HealthResponse:
    """
    Payment processor health check.

    Tests processor connectivity with the configured key.
    """
    from catering.infrastructure.payments import get_payment_processor

    processor = get_payment_processor()
    health = await processor.health_check()
    processor_status = ProviderHealthResponse(
        name=health.provider,
        available=health.available,
        latency_ms=health.response_time_ms,
        error=health.error,
    )

    return HealthResponse(
        status="healthy" if processor_status.available else "degraded",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        payment_processor=processor_status,
    )
