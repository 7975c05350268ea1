import pytest

from tuesday.core.exceptions.domain import DuplicateResourceError
from tuesday.repos.team_membership import TeamMembershipRepo
from tuesday.repos.user import UserRepo
from tuesday.schemas.membership import MembershipCreate
from tuesday.schemas.user import UserCreateRequest
from tuesday.services.admin_service import AdminService


async def test_create_user_normalises_input(client):
    response = await client.post(
        "/api/admin/users", json={"name": "  Ada Lovelace ", "email": " Ada@Example.COM "}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ada Lovelace"
    assert body["email"] == "ada@example.com"
    assert body["role"] == "MEMBER"


async def test_create_user_validation(client, make_user):
    await make_user("Ada", email="ada@example.com")

    missing = await client.post("/api/admin/users", json={"name": "", "email": "x@example.com"})
    no_email = await client.post("/api/admin/users", json={"name": "Bob"})
    bad_role = await client.post(
        "/api/admin/users", json={"name": "Bob", "email": "bob@example.com", "role": "OWNER"}
    )
    bad_email = await client.post("/api/admin/users", json={"name": "Bob", "email": "not-an-email"})
    duplicate = await client.post(
        "/api/admin/users", json={"name": "Ada Again", "email": "ADA@example.com"}
    )

    assert missing.status_code == 400
    assert missing.json() == {"error": "Name and email are required"}
    assert no_email.status_code == 400
    assert bad_role.json() == {"error": "Invalid user role"}
    assert bad_email.status_code == 400
    assert duplicate.status_code == 400


async def test_list_users_by_name_with_memberships(client, make_user, make_team, add_member):
    zed = await make_user("Zed")
    ada = await make_user("Ada")
    team = await make_team("Platform")
    await add_member(ada["id"], team["id"], role="LEAD")

    response = await client.get("/api/users")

    users = response.json()
    assert [u["id"] for u in users] == [ada["id"], zed["id"]]
    assert users[0]["memberships"][0]["role"] == "LEAD"
    assert users[0]["memberships"][0]["team"] == {"id": team["id"], "name": "Platform"}
    assert users[1]["memberships"] == []


async def test_update_user_role(client, make_user):
    ada = await make_user("Ada")

    promoted = await client.put(f"/api/admin/users/{ada['id']}/role", json={"role": "ADMIN"})
    invalid = await client.put(f"/api/admin/users/{ada['id']}/role", json={"role": "ROOT"})
    missing_role = await client.put(f"/api/admin/users/{ada['id']}/role", json={})
    unknown = await client.put("/api/admin/users/999/role", json={"role": "MEMBER"})

    assert promoted.status_code == 200
    assert promoted.json()["role"] == "ADMIN"
    assert invalid.json() == {"error": "Valid role is required"}
    assert missing_role.status_code == 400
    assert unknown.status_code == 404


async def test_promoted_user_sees_team_boards(client, make_user, make_team, make_board):
    ada = await make_user("Ada")
    team = await make_team("Secret")
    board = await make_board("Hidden", team_id=team["id"])

    before = await client.get(f"/api/boards/{board['id']}", params={"userId": ada["id"]})
    await client.put(f"/api/admin/users/{ada['id']}/role", json={"role": "ADMIN"})
    after = await client.get(f"/api/boards/{board['id']}", params={"userId": ada["id"]})

    assert before.status_code == 403
    assert after.status_code == 200


async def test_delete_user_unassigns_tasks(
    client, make_user, make_team, add_member, make_board, make_column, make_task
):
    ada = await make_user("Ada")
    team = await make_team("Platform")
    await add_member(ada["id"], team["id"])
    board = await make_board()
    column = await make_column(board["id"])
    task = await make_task(column["id"], title="Ship", assigneeId=ada["id"])

    response = await client.delete(f"/api/admin/users/{ada['id']}")

    assert response.json() == {"success": True}
    detail = await client.get(f"/api/boards/{board['id']}")
    [stored] = detail.json()["columns"][0]["tasks"]
    assert stored["id"] == task["id"]
    assert stored["assigneeId"] is None
    assert stored["owner"] == "Unassigned"
    overview = await client.get("/api/admin/overview")
    assert overview.json()["teams"][0]["memberships"] == []
    assert (await client.delete(f"/api/admin/users/{ada['id']}")).status_code == 404


async def test_create_team(client):
    created = await client.post("/api/admin/teams", json={"name": " Platform "})
    blank = await client.post("/api/admin/teams", json={"name": "  "})

    assert created.status_code == 201
    assert created.json()["name"] == "Platform"
    assert blank.status_code == 400
    assert blank.json() == {"error": "Team name is required"}


async def test_membership_is_upserted(client, make_user, make_team, add_member):
    ada = await make_user("Ada")
    team = await make_team("Platform")

    first = await add_member(ada["id"], team["id"])
    second = await add_member(ada["id"], team["id"], role="LEAD")

    assert first["role"] == "MEMBER"
    assert second["id"] == first["id"]
    assert second["role"] == "LEAD"
    assert second["team"] == {"id": team["id"], "name": "Platform"}
    assert second["user"]["email"] == "ada@example.com"

    users = (await client.get("/api/users")).json()
    assert len(users[0]["memberships"]) == 1


async def test_membership_validation(client, make_user, make_team):
    ada = await make_user("Ada")
    team = await make_team("Platform")

    missing_ids = await client.post("/api/admin/memberships", json={"userId": ada["id"]})
    bad_role = await client.post(
        "/api/admin/memberships",
        json={"userId": ada["id"], "teamId": team["id"], "role": "OWNER"},
    )
    unknown = await client.post("/api/admin/memberships", json={"userId": ada["id"], "teamId": 999})

    assert missing_ids.json() == {"error": "userId and teamId are required"}
    assert bad_role.json() == {"error": "Invalid team role"}
    assert unknown.status_code == 404
    assert unknown.json() == {"error": "User or team not found"}


async def test_delete_membership_revokes_board_access(
    client, make_user, make_team, add_member, make_board
):
    ada = await make_user("Ada")
    team = await make_team("Platform")
    await add_member(ada["id"], team["id"])
    board = await make_board("Platform Board", team_id=team["id"])

    response = await client.delete(f"/api/admin/memberships/{ada['id']}/{team['id']}")

    assert response.json() == {"success": True}
    denied = await client.get(f"/api/boards/{board['id']}", params={"userId": ada["id"]})
    assert denied.status_code == 403
    missing = await client.delete(f"/api/admin/memberships/{ada['id']}/{team['id']}")
    assert missing.status_code == 404


async def test_assign_board_team(client, make_team, make_board):
    team = await make_team("Platform")
    board = await make_board()

    assigned = await client.put(f"/api/admin/boards/{board['id']}/team", json={"teamId": team["id"]})
    opened = await client.put(f"/api/admin/boards/{board['id']}/team", json={"teamId": None})
    unknown_team = await client.put(f"/api/admin/boards/{board['id']}/team", json={"teamId": 999})
    unknown_board = await client.put("/api/admin/boards/999/team", json={"teamId": None})

    assert assigned.json()["team"] == {"id": team["id"], "name": "Platform"}
    assert opened.json()["teamId"] is None
    assert opened.json()["team"] is None
    assert unknown_team.status_code == 404
    assert unknown_board.status_code == 404


async def test_admin_overview(client, make_user, make_team, add_member, make_board):
    ada = await make_user("Ada")
    bob = await make_user("Bob")
    team = await make_team("Platform")
    await add_member(bob["id"], team["id"])
    board = await make_board("Roadmap", team_id=team["id"])

    response = await client.get("/api/admin/overview")

    body = response.json()
    assert [u["id"] for u in body["users"]] == [bob["id"], ada["id"]]
    assert body["teams"][0]["memberships"][0]["user"] == {
        "id": bob["id"],
        "name": "Bob",
        "email": "bob@example.com",
        "role": "MEMBER",
    }
    assert body["boards"][0]["id"] == board["id"]
    assert body["boards"][0]["team"]["name"] == "Platform"


async def test_ensure_admin_creates_then_promotes(session):
    service = AdminService(session)

    created = await service.ensure_admin(" Root@Example.com ", "Root")
    again = await service.ensure_admin("root@example.com", "Ignored")

    assert created.role == "ADMIN"
    assert created.email == "root@example.com"
    assert again.id == created.id
    assert again.name == "Root"


async def test_ensure_admin_promotes_existing_member(client, make_user, session):
    ada = await make_user("Ada")

    promoted = await AdminService(session).ensure_admin("ada@example.com", "Ada")

    assert promoted.id == ada["id"]
    assert promoted.role == "ADMIN"


async def test_create_user_losing_email_race_is_duplicate(make_user, session, monkeypatch):
    await make_user("Ada", email="ada@example.com")
    service = AdminService(session)

    async def not_found_yet(email):
        return None

    # The pre-check misses the row a concurrent request just inserted
    monkeypatch.setattr(service.users, "get_by_email", not_found_yet)

    with pytest.raises(DuplicateResourceError):
        await service.create_user(UserCreateRequest(name="Ada", email="ada@example.com"))

    users = await UserRepo(session).get_all_with_memberships()
    assert [u.email for u in users] == ["ada@example.com"]


async def test_membership_upsert_from_separate_sessions(
    make_user, make_team, session_factory
):
    ada = await make_user("Ada")
    team = await make_team("Platform")

    async with session_factory() as first:
        created = await TeamMembershipRepo(first).upsert(
            MembershipCreate(user_id=ada["id"], team_id=team["id"], role="MEMBER")
        )
    async with session_factory() as second:
        updated = await TeamMembershipRepo(second).upsert(
            MembershipCreate(user_id=ada["id"], team_id=team["id"], role="LEAD")
        )

    assert updated.id == created.id
    assert updated.role == "LEAD"
    assert updated.user.name == "Ada"
    assert updated.team.name == "Platform"
