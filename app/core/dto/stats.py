from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StatsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = 0
    today: int = 0
    this_week: int = 0
    service_types: dict[str, int] = {}


class HealthModel(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
