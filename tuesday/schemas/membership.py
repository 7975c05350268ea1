from tuesday.core.constants import TeamRole
from tuesday.schemas.base import BaseSchema, BaseTimestampSchema, RequestSchema
from tuesday.schemas.team import TeamResponse, TeamSummary
from tuesday.schemas.user import UserSummary


class MembershipCreateRequest(RequestSchema):
    user_id: int | None = None
    team_id: int | None = None
    role: str | None = None


class MembershipCreate(BaseSchema):
    user_id: int
    team_id: int
    role: str = TeamRole.MEMBER


class MembershipResponse(BaseTimestampSchema):
    id: int
    user_id: int
    team_id: int
    role: str
    team: TeamSummary
    user: UserSummary


class TeamMember(BaseTimestampSchema):
    """A membership seen from the team's side."""

    id: int
    user_id: int
    team_id: int
    role: str
    user: UserSummary


class TeamWithMemberships(TeamResponse):
    memberships: list[TeamMember] = []
