from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.dependencies import get_stats_service
from app.core.dto.stats import StatsModel
from app.core.services.stats_service import StatsService


router = APIRouter()


@router.get("")
async def get_stats(
    service: Annotated[StatsService, Depends(get_stats_service)],
) -> StatsModel:
    """
    Статистика заявок для администратора.

    Требует заголовок Authorization: Bearer <ADMIN_TOKEN>.

    Returns:
        StatsModel: total, today, thisWeek и распределение по serviceTypes.

    Raises:
        InvalidCredentials (401): Если токен отсутствует или неверен.
    """
    return await service.get_stats()
