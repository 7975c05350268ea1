from fastapi import APIRouter, Depends

from tuesday.api.deps import get_task_service
from tuesday.schemas.base import SuccessResponse
from tuesday.schemas.task import TaskResponse, TaskUpdateRequest
from tuesday.services.task_service import TaskService

router = APIRouter()


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdateRequest,
    service: TaskService = Depends(get_task_service),
):
    return await service.update_task(task_id, data)


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    await service.delete_task(task_id)
    return SuccessResponse()
