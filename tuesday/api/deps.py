from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tuesday.models.db import get_session
from tuesday.services.admin_service import AdminService
from tuesday.services.board_service import BoardService
from tuesday.services.overview_service import OverviewService
from tuesday.services.task_service import TaskService
from tuesday.services.user_service import UserService


def get_board_service(session: AsyncSession = Depends(get_session)) -> BoardService:
    return BoardService(session)


def get_task_service(session: AsyncSession = Depends(get_session)) -> TaskService:
    return TaskService(session)


def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(session)


def get_overview_service(session: AsyncSession = Depends(get_session)) -> OverviewService:
    return OverviewService(session)


def get_admin_service(session: AsyncSession = Depends(get_session)) -> AdminService:
    return AdminService(session)
