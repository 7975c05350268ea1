from tuesday.schemas.base import BaseSchema
from tuesday.schemas.board import BoardResponse
from tuesday.schemas.membership import TeamWithMemberships
from tuesday.schemas.user import UserWithMemberships


class OverviewUser(BaseSchema):
    id: int
    name: str


class OverviewTask(BaseSchema):
    id: int
    title: str
    status: str
    deadline: str
    board_id: int
    board_title: str
    column_id: int
    column_title: str


class DayBucket(BaseSchema):
    weekday: str
    date: str
    tasks: list[OverviewTask] = []


class WeeklyOverviewResponse(BaseSchema):
    user: OverviewUser
    week_start: str
    week_end: str
    days: list[DayBucket]


class AdminOverviewResponse(BaseSchema):
    users: list[UserWithMemberships]
    teams: list[TeamWithMemberships]
    boards: list[BoardResponse]
