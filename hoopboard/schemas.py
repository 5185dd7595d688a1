from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hoopboard.ingestion.schema import Game


class NoticeOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    expires_at: datetime


class ScheduleOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    is_today: bool
    loading: bool
    source: str
    count: int
    games: list[Game]
    notice: Optional[NoticeOut] = None
    message: Optional[str] = None
