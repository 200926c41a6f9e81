import time
from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.dto.stats import HealthModel


router = APIRouter()

STARTED_AT = time.monotonic()


@router.get("", summary="健康检查")
async def health() -> HealthModel:
    return HealthModel(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - STARTED_AT, 3),
    )
