from fastapi import APIRouter, Depends

from tuesday.api.deps import get_user_service
from tuesday.schemas.user import UserWithMemberships
from tuesday.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=list[UserWithMemberships])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()
