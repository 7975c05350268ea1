from fastapi import APIRouter, Depends

from tuesday.api.deps import get_admin_service
from tuesday.schemas.base import SuccessResponse
from tuesday.schemas.board import BoardResponse, BoardTeamUpdateRequest
from tuesday.schemas.membership import MembershipCreateRequest, MembershipResponse
from tuesday.schemas.overview import AdminOverviewResponse
from tuesday.schemas.team import TeamCreateRequest, TeamResponse
from tuesday.schemas.user import UserCreateRequest, UserResponse, UserRoleUpdateRequest
from tuesday.services.admin_service import AdminService

router = APIRouter()


@router.get("/overview", response_model=AdminOverviewResponse)
async def admin_overview(service: AdminService = Depends(get_admin_service)):
    return await service.get_overview()


@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(data: UserCreateRequest, service: AdminService = Depends(get_admin_service)):
    return await service.create_user(data)


@router.put("/users/{user_id}/role", response_model=UserResponse)
async def update_user_role(
    user_id: int,
    data: UserRoleUpdateRequest,
    service: AdminService = Depends(get_admin_service),
):
    return await service.update_user_role(user_id, data)


@router.delete("/users/{user_id}", response_model=SuccessResponse)
async def delete_user(user_id: int, service: AdminService = Depends(get_admin_service)):
    await service.delete_user(user_id)
    return SuccessResponse()


@router.post("/teams", response_model=TeamResponse, status_code=201)
async def create_team(data: TeamCreateRequest, service: AdminService = Depends(get_admin_service)):
    return await service.create_team(data)


@router.post("/memberships", response_model=MembershipResponse, status_code=201)
async def save_membership(
    data: MembershipCreateRequest,
    service: AdminService = Depends(get_admin_service),
):
    return await service.save_membership(data)


@router.delete("/memberships/{user_id}/{team_id}", response_model=SuccessResponse)
async def delete_membership(
    user_id: int,
    team_id: int,
    service: AdminService = Depends(get_admin_service),
):
    await service.delete_membership(user_id, team_id)
    return SuccessResponse()


@router.put("/boards/{board_id}/team", response_model=BoardResponse)
async def assign_board_team(
    board_id: int,
    data: BoardTeamUpdateRequest,
    service: AdminService = Depends(get_admin_service),
):
    return await service.assign_board_team(board_id, data)
