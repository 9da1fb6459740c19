"""
Health and readiness probes.

- /health        service info plus the engine defaults requests fall back to
- /health/live   process is up
- /health/ready  every edit metric scores a known typo pair correctly
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Response
from pydantic import BaseModel

from ccql.config import DEFAULT_SIMILARITY_THRESHOLD, EditMetric
from ccql.services.similarity_service import EditDistanceSimilarityService
from ccql.settings import get_settings

router = APIRouter(tags=["Health"])

# (a, b, expected is_similar) per metric at the default threshold
_PROBES = {
    EditMetric.OSA: [("continue", "cotninue", True), ("continue", "fix issues", False)],
    EditMetric.LEVENSHTEIN: [("continue", "contnue", True), ("continue", "cotninue", False)],
}


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    environment: str
    default_threshold: float
    default_metric: str


class MetricCheck(BaseModel):
    status: str
    detail: str = ""


class ReadinessResponse(BaseModel):
    status: str
    checks: Dict[str, MetricCheck]


def check_metric(metric: EditMetric) -> MetricCheck:
    """Run the probe pairs for one metric."""
    service = EditDistanceSimilarityService(metric=metric)
    for a, b, expected in _PROBES[metric]:
        if service.is_similar(a, b) != expected:
            return MetricCheck(status="not_ready", detail=f"{a!r} vs {b!r} != {expected}")
    return MetricCheck(status="ready")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=settings.app_version,
        environment=settings.environment.value,
        default_threshold=DEFAULT_SIMILARITY_THRESHOLD,
        default_metric=EditMetric.OSA.value,
    )


@router.get("/health/live")
async def liveness() -> Dict[str, str]:
    return {"status": "alive"}


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(response: Response) -> ReadinessResponse:
    """
    Readiness probe.

    Returns 503 if any metric gives an unexpected answer.
    """
    checks = {metric.value: check_metric(metric) for metric in EditMetric}
    ready = all(check.status == "ready" for check in checks.values())
    if not ready:
        response.status_code = 503
    return ReadinessResponse(status="ready" if ready else "not_ready", checks=checks)
