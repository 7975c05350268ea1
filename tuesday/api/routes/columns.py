from fastapi import APIRouter, Depends

from tuesday.api.deps import get_board_service, get_task_service
from tuesday.schemas.base import SuccessResponse
from tuesday.schemas.board import ColumnResponse, ColumnUpdateRequest
from tuesday.schemas.task import TaskCreateRequest, TaskResponse
from tuesday.services.board_service import BoardService
from tuesday.services.task_service import TaskService

router = APIRouter()


@router.put("/{column_id}", response_model=ColumnResponse)
async def update_column(
    column_id: int,
    data: ColumnUpdateRequest,
    service: BoardService = Depends(get_board_service),
):
    return await service.update_column(column_id, data)


@router.delete("/{column_id}", response_model=SuccessResponse)
async def delete_column(column_id: int, service: BoardService = Depends(get_board_service)):
    await service.delete_column(column_id)
    return SuccessResponse()


@router.post("/{column_id}/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    column_id: int,
    data: TaskCreateRequest,
    service: TaskService = Depends(get_task_service),
):
    return await service.create_task(column_id, data)
