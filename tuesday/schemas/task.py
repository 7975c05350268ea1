from tuesday.schemas.base import BaseSchema, BaseTimestampSchema, RequestSchema


class TaskCreateRequest(RequestSchema):
    title: str | None = None
    owner: str | None = None
    assignee_id: int | None = None
    status: str | None = None
    deadline: str | None = None


class TaskUpdateRequest(RequestSchema):
    """Partial update. Which keys were sent is read from ``model_fields_set``."""

    title: str | None = None
    owner: str | None = None
    assignee_id: int | None = None
    status: str | None = None
    deadline: str | None = None


class TaskCreate(BaseSchema):
    title: str
    owner: str
    assignee_id: int | None = None
    status: str
    deadline: str | None = None
    column_id: int
    order: int


class TaskResponse(BaseTimestampSchema):
    id: int
    title: str
    owner: str
    assignee_id: int | None = None
    status: str
    deadline: str | None = None
    column_id: int
    order: int
