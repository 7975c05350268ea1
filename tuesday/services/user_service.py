from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.repos.user import UserRepo
from tuesday.schemas.user import UserWithMemberships


class UserService:
    def __init__(self, session: AsyncSession):
        self.users = UserRepo(session)

    async def list_users(self) -> list[UserWithMemberships]:
        """All users by name, each with their team memberships."""
        users = await self.users.get_all_with_memberships()
        return [UserWithMemberships.model_validate(u) for u in users]
