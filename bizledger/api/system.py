"""Operational endpoints: liveness and Prometheus scrape"""

from fastapi import APIRouter, Depends
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from bizledger.api.dependencies import get_settings
from bizledger.config import Settings
from bizledger.infrastructure.cache import result_cache

router = APIRouter()


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "service": settings.service_name, "cached_results": len(result_cache)}


@router.get("/metrics")
def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
