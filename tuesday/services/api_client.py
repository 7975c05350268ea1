from functools import lru_cache
from typing import Any

import httpx
from loguru import logger

from tuesday.core.config import get_settings
from tuesday.core.exceptions.domain import (
    ApiConnectionError,
    AuthorizationError,
    ResourceNotFoundError,
    ValidationError,
)
from tuesday.schemas.board import BoardDetailResponse, BoardResponse, ColumnResponse
from tuesday.schemas.membership import MembershipResponse
from tuesday.schemas.overview import AdminOverviewResponse, WeeklyOverviewResponse
from tuesday.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from tuesday.schemas.team import TeamResponse
from tuesday.schemas.user import UserResponse, UserWithMemberships


class TuesdayClient:
    """Async client for the Tuesday REST API using httpx.

    A fresh ``httpx.AsyncClient`` is opened per request because Streamlit pages
    drive each call through its own event loop (see ``run_async``).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport
        logger.debug(f"TuesdayClient initialized: base_url={self.base_url}")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"Tuesday API error: {response.status_code} - {response.text[:200]}"
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"Tuesday API error: {response.status_code}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json_data: dict | None = None,
    ) -> Any:
        """Send a request and decode the JSON body, raising domain errors for failures."""
        query = {k: v for k, v in (params or {}).items() if v is not None and v != ""}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, params=query, json=json_data)
        except httpx.TimeoutException as e:
            raise ApiConnectionError(f"Tuesday API timed out on {method} {path}") from e
        except httpx.HTTPError as e:
            raise ApiConnectionError(f"Cannot connect to Tuesday API at {self.base_url}: {e}") from e

        if response.is_success:
            return response.json()

        message = self._error_message(response)
        logger.warning(f"{method} {path} failed with {response.status_code}: {message}")

        if response.status_code == 400:
            raise ValidationError(message)
        if response.status_code == 403:
            raise AuthorizationError(message)
        if response.status_code == 404:
            raise ResourceNotFoundError(message=message)
        raise ApiConnectionError(message, status_code=response.status_code)

    async def health(self) -> bool:
        """True when the API answers its liveness probe."""
        root = self.base_url.rsplit("/api", 1)[0]
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(f"{root}/health")
        except httpx.HTTPError:
            return False
        return response.is_success and response.json().get("status") == "ok"

    # ─── Boards ───────────────────────────────────────────────────────

    async def list_boards(self, user_id: int | None = None) -> list[BoardResponse]:
        data = await self._request("GET", "/boards", params={"userId": user_id})
        return [BoardResponse.model_validate(b) for b in data]

    async def create_board(self, title: str, team_id: int | None = None) -> BoardResponse:
        data = await self._request("POST", "/boards", json_data={"title": title, "teamId": team_id})
        return BoardResponse.model_validate(data)

    async def get_board(self, board_id: int, user_id: int | None = None) -> BoardDetailResponse:
        data = await self._request("GET", f"/boards/{board_id}", params={"userId": user_id})
        return BoardDetailResponse.model_validate(data)

    async def delete_board(self, board_id: int) -> None:
        await self._request("DELETE", f"/boards/{board_id}")

    # ─── Columns ──────────────────────────────────────────────────────

    async def create_column(
        self, board_id: int, title: str, color: str | None = None
    ) -> ColumnResponse:
        data = await self._request(
            "POST", f"/boards/{board_id}/columns", json_data={"title": title, "color": color}
        )
        return ColumnResponse.model_validate(data)

    async def update_column(
        self, column_id: int, *, title: str | None = None, color: str | None = None
    ) -> ColumnResponse:
        data = await self._request(
            "PUT", f"/columns/{column_id}", json_data={"title": title, "color": color}
        )
        return ColumnResponse.model_validate(data)

    async def delete_column(self, column_id: int) -> None:
        await self._request("DELETE", f"/columns/{column_id}")

    # ─── Tasks ────────────────────────────────────────────────────────

    async def create_task(self, column_id: int, **fields: Any) -> TaskResponse:
        """Create a task; ``fields`` are any of title, owner, assignee_id, status, deadline."""
        body = TaskCreateRequest(**fields).model_dump(by_alias=True, exclude_unset=True)
        data = await self._request("POST", f"/columns/{column_id}/tasks", json_data=body)
        return TaskResponse.model_validate(data)

    async def update_task(self, task_id: int, **updates: Any) -> TaskResponse:
        """Send only the given fields; passing ``assignee_id=None`` clears the assignee."""
        body = TaskUpdateRequest(**updates).model_dump(by_alias=True, exclude_unset=True)
        data = await self._request("PUT", f"/tasks/{task_id}", json_data=body)
        return TaskResponse.model_validate(data)

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    # ─── Users & overview ─────────────────────────────────────────────

    async def list_users(self) -> list[UserWithMemberships]:
        data = await self._request("GET", "/users")
        return [UserWithMemberships.model_validate(u) for u in data]

    async def weekly_overview(
        self, user_id: int, week_start: str | None = None
    ) -> WeeklyOverviewResponse:
        data = await self._request(
            "GET", "/overview/weekly", params={"userId": user_id, "weekStart": week_start}
        )
        return WeeklyOverviewResponse.model_validate(data)

    # ─── Admin ────────────────────────────────────────────────────────

    async def admin_overview(self) -> AdminOverviewResponse:
        data = await self._request("GET", "/admin/overview")
        return AdminOverviewResponse.model_validate(data)

    async def create_user(self, name: str, email: str, role: str | None = None) -> UserResponse:
        data = await self._request(
            "POST", "/admin/users", json_data={"name": name, "email": email, "role": role}
        )
        return UserResponse.model_validate(data)

    async def update_user_role(self, user_id: int, role: str) -> UserResponse:
        data = await self._request("PUT", f"/admin/users/{user_id}/role", json_data={"role": role})
        return UserResponse.model_validate(data)

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/admin/users/{user_id}")

    async def create_team(self, name: str) -> TeamResponse:
        data = await self._request("POST", "/admin/teams", json_data={"name": name})
        return TeamResponse.model_validate(data)

    async def save_membership(
        self, user_id: int, team_id: int, role: str | None = None
    ) -> MembershipResponse:
        data = await self._request(
            "POST",
            "/admin/memberships",
            json_data={"userId": user_id, "teamId": team_id, "role": role},
        )
        return MembershipResponse.model_validate(data)

    async def delete_membership(self, user_id: int, team_id: int) -> None:
        await self._request("DELETE", f"/admin/memberships/{user_id}/{team_id}")

    async def assign_board_team(self, board_id: int, team_id: int | None) -> BoardResponse:
        data = await self._request(
            "PUT", f"/admin/boards/{board_id}/team", json_data={"teamId": team_id}
        )
        return BoardResponse.model_validate(data)


@lru_cache
def get_api_client() -> TuesdayClient:
    settings = get_settings()
    return TuesdayClient(settings.api_base_url, timeout=settings.api_timeout_seconds)
