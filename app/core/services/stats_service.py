from collections import Counter
from datetime import datetime, timedelta

from app.core.dto.stats import StatsModel
from app.core.repositories.submission_repository import SubmissionRepository
from app.utils.enums import UNSELECTED_SERVICE_TYPE


class StatsService:

    def __init__(self, repository: SubmissionRepository):
        self.repository = repository

    async def get_stats(self, now: datetime | None = None) -> StatsModel:
        """
        Сводка по заявкам.

        "Сегодня" сравнивает календарную дату в локальной зоне сервера,
        "за неделю" считает заявки не старше семи суток от `now`.
        Заявки с нечитаемой меткой времени попадают только в total и
        serviceTypes.
        """
        now = (now or datetime.now()).astimezone()
        week_ago = now - timedelta(days=7)

        submissions = await self.repository.get_all_items()

        today = 0
        this_week = 0
        service_types: Counter[str] = Counter()

        for submission in submissions:
            service_types[submission.service_type or UNSELECTED_SERVICE_TYPE] += 1

            created_at = submission.created_at
            if created_at is None:
                continue
            if created_at.tzinfo is None:
                created_at = created_at.astimezone()
            created_at = created_at.astimezone(now.tzinfo)

            if created_at.date() == now.date():
                today += 1
            if created_at >= week_ago:
                this_week += 1

        return StatsModel(
            total=len(submissions),
            today=today,
            this_week=this_week,
            service_types=dict(service_types),
        )
