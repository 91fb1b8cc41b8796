"""Health Probes: basic liveness and detailed dependency/system report.

Invariants:
    - GET /health always returns 200 if the process is up
    - GET /health/detailed returns 200 for ok, warning AND critical (status lives in the body)
    - GET /health/detailed returns 500 only when system metrics cannot be gathered,
      with a bare error report (no partial system data)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from helpdesk.api.dependencies import get_health_aggregator, get_resources
from helpdesk.core import envelope
from helpdesk.core.errors import HealthReportUnavailableError
from helpdesk.infrastructure.resources import AppResources
from helpdesk.services.health_check import HealthAggregator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(
    aggregator: HealthAggregator = Depends(get_health_aggregator),
):
    """Basic liveness probe."""
    return envelope.success("Health check successful", aggregator.basic_health())


@router.get("/detailed")
async def detailed_health_check(
    aggregator: HealthAggregator = Depends(get_health_aggregator),
    resources: AppResources = Depends(get_resources),
):
    """Full report: system metrics, database and cache probes, overall status."""
    try:
        report = await aggregator.detailed_health()
    except HealthReportUnavailableError as exc:
        body = {
            "status": "error",
            "timestamp": envelope.utc_timestamp(),
            "message": exc.message,
        }
        if not resources.settings.is_production:
            body["error"] = exc.reason
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body,
        )
    if report["status"] != "ok":
        logger.warning(f"Detailed health status: {report['status']}")
    return envelope.success("Detailed health check successful", report)
