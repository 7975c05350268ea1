from fastapi import APIRouter, Depends, Query

from tuesday.api.deps import get_board_service
from tuesday.schemas.base import SuccessResponse
from tuesday.schemas.board import (
    BoardCreateRequest,
    BoardDetailResponse,
    BoardResponse,
    ColumnCreateRequest,
    ColumnResponse,
)
from tuesday.services.board_service import BoardService

router = APIRouter()


@router.get("", response_model=list[BoardResponse])
async def list_boards(
    user_id: int | None = Query(default=None, alias="userId"),
    service: BoardService = Depends(get_board_service),
):
    return await service.list_boards(user_id)


@router.post("", response_model=BoardResponse, status_code=201)
async def create_board(
    data: BoardCreateRequest,
    service: BoardService = Depends(get_board_service),
):
    return await service.create_board(data)


@router.get("/{board_id}", response_model=BoardDetailResponse)
async def get_board(
    board_id: int,
    user_id: int | None = Query(default=None, alias="userId"),
    service: BoardService = Depends(get_board_service),
):
    return await service.get_board(board_id, user_id)


@router.delete("/{board_id}", response_model=SuccessResponse)
async def delete_board(board_id: int, service: BoardService = Depends(get_board_service)):
    await service.delete_board(board_id)
    return SuccessResponse()


@router.post("/{board_id}/columns", response_model=ColumnResponse, status_code=201)
async def create_column(
    board_id: int,
    data: ColumnCreateRequest,
    service: BoardService = Depends(get_board_service),
):
    return await service.create_column(board_id, data)
