from tuesday.schemas.base import BaseSchema, BaseTimestampSchema, RequestSchema


class TeamCreateRequest(RequestSchema):
    name: str | None = None


class TeamCreate(BaseSchema):
    name: str


class TeamSummary(BaseSchema):
    id: int
    name: str


class TeamResponse(BaseTimestampSchema):
    id: int
    name: str
