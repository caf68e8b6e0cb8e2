"""Health endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from chronosec.telemetry.tracing import SERVICE_VERSION

router = APIRouter()

_start_time = datetime.now(timezone.utc)


@router.get("/health")
async def health(request: Request):
    uptime = (datetime.now(timezone.utc) - _start_time).total_seconds()
    return {
        "status": "healthy",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION,
        "llm_configured": getattr(request.app.state, "llm", None) is not None,
    }
