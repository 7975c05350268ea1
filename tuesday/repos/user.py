from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tuesday.models.team_membership import TeamMembership
from tuesday.models.user import User
from tuesday.repos.base import BaseRepository, storable_id
from tuesday.schemas.user import UserCreate, UserUpdate


class UserRepo(BaseRepository[User, UserCreate, UserUpdate]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_with_memberships(self, *, newest_first: bool = False) -> list[User]:
        """All users with their memberships and teams, by name or by creation."""
        order = (User.created_at.desc(), User.id.desc()) if newest_first else (User.name, User.id)
        stmt = (
            select(User)
            .options(selectinload(User.memberships).selectinload(TeamMembership.team))
            .order_by(*order)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_team_ids(self, user_id: int) -> set[int]:
        """Ids of every team the user belongs to."""
        stmt = select(TeamMembership.team_id).where(TeamMembership.user_id == user_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_for_delete(self, user_id: int) -> User | None:
        """User with the collections a delete must cascade over or unassign."""
        if not storable_id(user_id):
            return None
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.memberships), selectinload(User.assigned_tasks))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
