from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from driving_school.config import Settings
from driving_school.dependencies import get_metrics, get_settings
from driving_school.services.metrics import RequestMetrics

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check(
    metrics: RequestMetrics = Depends(get_metrics),
    settings: Settings = Depends(get_settings),
):
    """Liveness probe. Always 200 while the process can answer."""
    snapshot = metrics.snapshot()
    return {
        "status": "healthy",
        "timestamp": _now(),
        "uptime": metrics.uptime_seconds(),
        "dataStore": "in-memory",
        "environment": settings.environment,
        "version": settings.api_version,
        "slos": {
            "errorRate": f"{metrics.error_rate():.4f}",
            "errorBudgetRemaining": f"{settings.slo_error_budget - snapshot['errorBudgetUsed']:.4f}",
            "targetUptime": f"{settings.slo_target_uptime * 100:g}%",
            "targetLatency": f"{settings.slo_target_latency_ms}ms",
        },
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe. There is no external datastore to wait for."""
    return {"status": "ready", "ready": True, "timestamp": _now()}
