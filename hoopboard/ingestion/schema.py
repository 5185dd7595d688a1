"""Internal data contract for normalized games."""

from enum import IntEnum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

PLACEHOLDER_TRICODE = "NBA"


class StatusCode(IntEnum):
    NOT_STARTED = 1
    LIVE = 2
    FINAL = 3


class _ContractModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Leader(_ContractModel):
    name: str = ""
    stat: str = ""


class LeaderPair(_ContractModel):
    home: Optional[Leader] = None
    away: Optional[Leader] = None


class TeamResult(_ContractModel):
    """
    One side of a game. ``wins`` and ``losses`` are either both set or both None.
    """

    id: Optional[Union[int, str]] = None
    tricode: str = PLACEHOLDER_TRICODE
    name: str = ""
    logo: Optional[str] = None
    score: int = 0
    wins: Optional[int] = None
    losses: Optional[int] = None


class Game(_ContractModel):
    """
    Internal representation of a game used across fetch -> normalize -> render.
    """

    # Required fields
    id: str
    home: TeamResult
    away: TeamResult

    # Optional fields
    status: str = ""
    status_code: StatusCode = StatusCode.NOT_STARTED
    clock: str = ""
    leaders: Optional[LeaderPair] = None

    @computed_field(alias="isLive")
    @property
    def is_live(self) -> bool:
        return self.status_code == StatusCode.LIVE
