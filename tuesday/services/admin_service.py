from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.core.constants import UNASSIGNED_OWNER, TeamRole, UserRole
from tuesday.core.exceptions.domain import (
    DuplicateResourceError,
    ResourceNotFoundError,
    ValidationError,
)
from tuesday.repos.board import BoardRepo
from tuesday.repos.team import TeamRepo
from tuesday.repos.team_membership import TeamMembershipRepo
from tuesday.repos.user import UserRepo
from tuesday.schemas.board import BoardResponse, BoardTeamUpdateRequest
from tuesday.schemas.membership import (
    MembershipCreate,
    MembershipCreateRequest,
    MembershipResponse,
    TeamWithMemberships,
)
from tuesday.schemas.overview import AdminOverviewResponse
from tuesday.schemas.team import TeamCreate, TeamCreateRequest, TeamResponse
from tuesday.schemas.user import (
    UserCreate,
    UserCreateRequest,
    UserResponse,
    UserRoleUpdateRequest,
    UserUpdate,
    UserWithMemberships,
)

USER_ROLES = {r.value for r in UserRole}
TEAM_ROLES = {r.value for r in TeamRole}


class AdminService:
    """User, team, membership and board-visibility management."""

    def __init__(self, session: AsyncSession):
        self.users = UserRepo(session)
        self.teams = TeamRepo(session)
        self.memberships = TeamMembershipRepo(session)
        self.boards = BoardRepo(session)

    async def get_overview(self) -> AdminOverviewResponse:
        users = await self.users.get_all_with_memberships(newest_first=True)
        teams = await self.teams.get_all_with_memberships()
        boards = await self.boards.list_visible()
        return AdminOverviewResponse(
            users=[UserWithMemberships.model_validate(u) for u in users],
            teams=[TeamWithMemberships.model_validate(t) for t in teams],
            boards=[BoardResponse.model_validate(b) for b in boards],
        )

    async def create_user(self, data: UserCreateRequest) -> UserResponse:
        name = (data.name or "").strip()
        email = (data.email or "").strip().lower()
        role = data.role or UserRole.MEMBER

        if not name or not email:
            raise ValidationError("Name and email are required")
        if role not in USER_ROLES:
            raise ValidationError("Invalid user role")
        if await self.users.get_by_email(email):
            raise DuplicateResourceError("User", email)

        try:
            user = await self.users.create_one(UserCreate(name=name, email=email, role=role))
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same email
            await self.users.session.rollback()
            raise DuplicateResourceError("User", email) from e
        logger.info(f"User created: id={user.id}, email={user.email}, role={user.role}")
        return UserResponse.model_validate(user)

    async def update_user_role(self, user_id: int, data: UserRoleUpdateRequest) -> UserResponse:
        if not data.role or data.role not in USER_ROLES:
            raise ValidationError("Valid role is required")

        user = await self.users.update_by_id(user_id, UserUpdate(role=data.role))
        if not user:
            raise ResourceNotFoundError("User", str(user_id))
        logger.info(f"User role updated: id={user_id}, role={user.role}")
        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user, dropping their memberships and unassigning their tasks."""
        user = await self.users.get_for_delete(user_id)
        if not user:
            raise ResourceNotFoundError("User", str(user_id))
        for task in user.assigned_tasks:
            task.owner = UNASSIGNED_OWNER
        await self.users.delete(user)
        logger.info(f"User deleted: id={user_id}")

    async def ensure_admin(self, email: str, name: str) -> UserResponse:
        """Make sure an administrator with ``email`` exists, promoting it if needed."""
        email = email.strip().lower()
        user = await self.users.get_by_email(email)
        if user is None:
            user = await self.users.create_one(
                UserCreate(name=name, email=email, role=UserRole.ADMIN)
            )
            logger.info(f"Bootstrap admin created: {email}")
        elif user.role != UserRole.ADMIN:
            user = await self.users.apply(user, {"role": UserRole.ADMIN})
            logger.info(f"Bootstrap admin promoted: {email}")
        return UserResponse.model_validate(user)

    async def create_team(self, data: TeamCreateRequest) -> TeamResponse:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Team name is required")

        team = await self.teams.create_one(TeamCreate(name=name))
        logger.info(f"Team created: id={team.id}, name={name!r}")
        return TeamResponse.model_validate(team)

    async def save_membership(self, data: MembershipCreateRequest) -> MembershipResponse:
        """Add a user to a team, or change their role if they are already a member."""
        if data.user_id is None or data.team_id is None:
            raise ValidationError("userId and teamId are required")

        role = data.role or TeamRole.MEMBER
        if role not in TEAM_ROLES:
            raise ValidationError("Invalid team role")

        if not await self.users.exists(data.user_id) or not await self.teams.exists(data.team_id):
            raise ResourceNotFoundError("User or team")

        membership = await self.memberships.upsert(
            MembershipCreate(user_id=data.user_id, team_id=data.team_id, role=role)
        )
        logger.info(
            f"Membership saved: user_id={data.user_id}, team_id={data.team_id}, role={role}"
        )
        return MembershipResponse.model_validate(membership)

    async def delete_membership(self, user_id: int, team_id: int) -> None:
        membership = await self.memberships.get_by_user_and_team(user_id, team_id)
        if not membership:
            raise ResourceNotFoundError("Membership")
        await self.memberships.delete(membership)
        logger.info(f"Membership deleted: user_id={user_id}, team_id={team_id}")

    async def assign_board_team(self, board_id: int, data: BoardTeamUpdateRequest) -> BoardResponse:
        """Restrict a board to one team, or open it to everyone with ``teamId: null``."""
        board = await self.boards.get_by_id(board_id)
        if not board:
            raise ResourceNotFoundError("Board", str(board_id))

        if data.team_id is not None and not await self.teams.exists(data.team_id):
            raise ResourceNotFoundError("Team", str(data.team_id))

        await self.boards.apply(board, {"team_id": data.team_id})
        logger.info(f"Board visibility updated: id={board_id}, team_id={data.team_id}")
        return BoardResponse.model_validate(await self.boards.get_with_team(board_id))
