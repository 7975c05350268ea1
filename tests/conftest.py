import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tuesday.api.main import app
from tuesday.models.base import Base
from tuesday.models.board import Board  # noqa: F401
from tuesday.models.board_column import BoardColumn  # noqa: F401
from tuesday.models.db import get_session
from tuesday.models.task import Task  # noqa: F401
from tuesday.models.team import Team  # noqa: F401
from tuesday.models.team_membership import TeamMembership  # noqa: F401
from tuesday.models.user import User  # noqa: F401


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    async def _make(name: str, role: str = "MEMBER", email: str | None = None) -> dict:
        email = email or f"{name.lower().replace(' ', '.')}@example.com"
        response = await client.post(
            "/api/admin/users", json={"name": name, "email": email, "role": role}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_team(client):
    async def _make(name: str) -> dict:
        response = await client.post("/api/admin/teams", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def add_member(client):
    async def _add(user_id: int, team_id: int, role: str = "MEMBER") -> dict:
        response = await client.post(
            "/api/admin/memberships", json={"userId": user_id, "teamId": team_id, "role": role}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _add


@pytest.fixture
def make_board(client):
    async def _make(title: str = "Roadmap", team_id: int | None = None) -> dict:
        response = await client.post("/api/boards", json={"title": title, "teamId": team_id})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_column(client):
    async def _make(board_id: int, title: str = "Backlog", color: str | None = None) -> dict:
        body = {"title": title}
        if color:
            body["color"] = color
        response = await client.post(f"/api/boards/{board_id}/columns", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_task(client):
    async def _make(column_id: int, **fields) -> dict:
        response = await client.post(f"/api/columns/{column_id}/tasks", json=fields)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
