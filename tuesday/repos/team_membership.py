from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.team_membership import TeamMembership
from tuesday.repos.base import BaseRepository, storable_id
from tuesday.schemas.membership import MembershipCreate


class TeamMembershipRepo(BaseRepository[TeamMembership, MembershipCreate, MembershipCreate]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, TeamMembership)

    async def get_by_user_and_team(self, user_id: int, team_id: int) -> TeamMembership | None:
        if not storable_id(user_id) or not storable_id(team_id):
            return None
        stmt = select(TeamMembership).where(
            TeamMembership.user_id == user_id,
            TeamMembership.team_id == team_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_detailed(self, membership_id: int) -> TeamMembership | None:
        """Membership with both its user and team loaded."""
        stmt = (
            select(TeamMembership)
            .where(TeamMembership.id == membership_id)
            .options(selectinload(TeamMembership.user), selectinload(TeamMembership.team))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        schema: MembershipCreate,
        *,
        auto_commit: bool = True,
    ) -> TeamMembership:
        """Create a membership, or overwrite the role of an existing (user, team) pair.

        A single INSERT .. ON CONFLICT DO UPDATE, so concurrent saves of the
        same pair cannot trip the unique constraint.
        """
        dialect = self.session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert

        stmt = insert(TeamMembership).values(**schema.model_dump())
        stmt = stmt.on_conflict_do_update(
            index_elements=[TeamMembership.user_id, TeamMembership.team_id],
            set_={"role": stmt.excluded.role, "updated_at": func.now()},
        ).returning(TeamMembership.id)

        result = await self.session.execute(stmt)
        membership_id = result.scalar_one()
        if auto_commit:
            await self.session.commit()
        else:
            await self.session.flush()
        return await self.get_detailed(membership_id)
