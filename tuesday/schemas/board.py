from tuesday.schemas.base import BaseSchema, BaseTimestampSchema, RequestSchema
from tuesday.schemas.task import TaskResponse
from tuesday.schemas.team import TeamSummary


class BoardCreateRequest(RequestSchema):
    title: str | None = None
    team_id: int | None = None


class BoardTeamUpdateRequest(RequestSchema):
    team_id: int | None = None


class BoardCreate(BaseSchema):
    title: str
    team_id: int | None = None


class BoardResponse(BaseTimestampSchema):
    id: int
    title: str
    team_id: int | None = None
    team: TeamSummary | None = None


class ColumnCreateRequest(RequestSchema):
    title: str | None = None
    color: str | None = None


class ColumnUpdateRequest(RequestSchema):
    title: str | None = None
    color: str | None = None


class ColumnCreate(BaseSchema):
    title: str
    color: str
    board_id: int
    order: int


class ColumnResponse(BaseTimestampSchema):
    id: int
    title: str
    color: str
    board_id: int
    order: int
    tasks: list[TaskResponse] = []


class BoardDetailResponse(BoardResponse):
    columns: list[ColumnResponse] = []
