"""Prometheus scrape endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST

from .....core.config import Settings
from .....infrastructure.monitoring import MetricsCollector
from ....dependencies import get_app_settings, get_metrics_collector

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
async def prometheus_metrics(
    metrics: MetricsCollector = Depends(get_metrics_collector),
    settings: Settings = Depends(get_app_settings),
) -> PlainTextResponse:
    if not settings.METRICS_ENABLED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled")
    return PlainTextResponse(metrics.get_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)
