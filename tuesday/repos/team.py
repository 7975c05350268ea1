from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.team import Team
from tuesday.models.team_membership import TeamMembership
from tuesday.repos.base import BaseRepository
from tuesday.schemas.team import TeamCreate


class TeamRepo(BaseRepository[Team, TeamCreate, TeamCreate]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Team)

    async def get_all_with_memberships(self) -> list[Team]:
        """All teams by name, each with its members."""
        stmt = (
            select(Team)
            .options(selectinload(Team.memberships).selectinload(TeamMembership.user))
            .order_by(Team.name, Team.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
