from pydantic import EmailStr, field_validator

from tuesday.core.constants import UserRole
from tuesday.schemas.base import BaseSchema, BaseTimestampSchema, RequestSchema
from tuesday.schemas.team import TeamSummary


class UserCreateRequest(RequestSchema):
    name: str | None = None
    email: EmailStr | None = None
    role: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class UserRoleUpdateRequest(RequestSchema):
    role: str | None = None


class UserCreate(BaseSchema):
    """Internal schema for creating a user in the database."""

    name: str
    email: str
    role: str = UserRole.MEMBER


class UserUpdate(BaseSchema):
    name: str | None = None
    role: str | None = None


class UserSummary(BaseSchema):
    id: int
    name: str
    email: str
    role: str


class UserResponse(BaseTimestampSchema):
    id: int
    name: str
    email: str
    role: str


class UserMembership(BaseTimestampSchema):
    """A membership seen from the user's side."""

    id: int
    user_id: int
    team_id: int
    role: str
    team: TeamSummary


class UserWithMemberships(UserResponse):
    memberships: list[UserMembership] = []
