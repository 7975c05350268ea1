import pytest


@pytest.fixture
async def column(make_board, make_column):
    board = await make_board()
    return await make_column(board["id"], "Todo")


async def test_create_task_defaults(make_task, column):
    task = await make_task(column["id"])

    assert task["title"] == ""
    assert task["owner"] == "Unassigned"
    assert task["status"] == "Not Started"
    assert task["deadline"] is None
    assert task["assigneeId"] is None
    assert task["columnId"] == column["id"]
    assert task["order"] == 0


async def test_create_task_owner_follows_assignee(make_task, make_user, column):
    ada = await make_user("Ada")

    assigned = await make_task(column["id"], title="Spec", assigneeId=ada["id"])
    overridden = await make_task(column["id"], title="Review", assigneeId=ada["id"], owner="Grace")

    assert assigned["owner"] == "Ada"
    assert assigned["order"] == 0
    assert overridden["owner"] == "Grace"
    assert overridden["order"] == 1


async def test_create_task_validation(client, column):
    missing_column = await client.post("/api/columns/999/tasks", json={"title": "x"})
    bad_status = await client.post(
        f"/api/columns/{column['id']}/tasks", json={"title": "x", "status": "Blocked"}
    )
    bad_deadline = await client.post(
        f"/api/columns/{column['id']}/tasks", json={"title": "x", "deadline": "2026-02-30"}
    )
    unknown_assignee = await client.post(
        f"/api/columns/{column['id']}/tasks", json={"title": "x", "assigneeId": 999}
    )

    assert missing_column.status_code == 404
    assert bad_status.status_code == 400
    assert bad_deadline.status_code == 400
    assert bad_deadline.json() == {"error": "deadline must be in YYYY-MM-DD format"}
    assert unknown_assignee.status_code == 404


async def test_assigning_user_sets_owner_and_clearing_resets_it(client, make_task, make_user, column):
    ada = await make_user("Ada")
    task = await make_task(column["id"], title="Ship")

    assigned = await client.put(f"/api/tasks/{task['id']}", json={"assigneeId": ada["id"]})
    assert assigned.status_code == 200
    assert assigned.json()["assigneeId"] == ada["id"]
    assert assigned.json()["owner"] == "Ada"

    cleared = await client.put(f"/api/tasks/{task['id']}", json={"assigneeId": None})
    assert cleared.json()["assigneeId"] is None
    assert cleared.json()["owner"] == "Unassigned"


async def test_explicit_owner_wins_over_assignee(client, make_task, make_user, column):
    ada = await make_user("Ada")
    task = await make_task(column["id"], title="Ship")

    response = await client.put(
        f"/api/tasks/{task['id']}", json={"assigneeId": ada["id"], "owner": "Release crew"}
    )

    assert response.json()["owner"] == "Release crew"


async def test_blank_owner_falls_back_to_assignee(client, make_task, make_user, column):
    ada = await make_user("Ada")
    task = await make_task(column["id"], title="Ship", assigneeId=ada["id"], owner="Someone")

    response = await client.put(f"/api/tasks/{task['id']}", json={"owner": "  "})

    assert response.json()["owner"] == "Ada"


async def test_partial_update_only_touches_sent_fields(client, make_task, column):
    task = await make_task(column["id"], title="Ship", status="Stuck", deadline="2026-03-01")

    response = await client.put(
        f"/api/tasks/{task['id']}",
        json={"status": "Done", "order": 99, "columnId": 12345, "id": 7},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["id"] == task["id"]
    assert body["status"] == "Done"
    assert body["title"] == "Ship"
    assert body["deadline"] == "2026-03-01"
    assert body["order"] == 0
    assert body["columnId"] == column["id"]


async def test_deadline_can_be_cleared(client, make_task, column):
    task = await make_task(column["id"], title="Ship", deadline="2026-03-01")

    empty = await client.put(f"/api/tasks/{task['id']}", json={"deadline": ""})
    assert empty.json()["deadline"] is None

    await client.put(f"/api/tasks/{task['id']}", json={"deadline": "2026-03-02"})
    nulled = await client.put(f"/api/tasks/{task['id']}", json={"deadline": None})
    assert nulled.json()["deadline"] is None


async def test_update_task_validation(client, make_task, column):
    task = await make_task(column["id"], title="Ship")

    bad_status = await client.put(f"/api/tasks/{task['id']}", json={"status": "Later"})
    bad_deadline = await client.put(f"/api/tasks/{task['id']}", json={"deadline": "03/01/2026"})
    unknown_assignee = await client.put(f"/api/tasks/{task['id']}", json={"assigneeId": 404})
    missing = await client.put("/api/tasks/999", json={"title": "x"})

    assert bad_status.status_code == 400
    assert bad_deadline.status_code == 400
    assert bad_deadline.json() == {"error": "deadline must be in YYYY-MM-DD format"}
    assert unknown_assignee.status_code == 404
    assert missing.status_code == 404


async def test_delete_task(client, make_task, column):
    task = await make_task(column["id"], title="Ship")

    response = await client.delete(f"/api/tasks/{task['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True}


async def test_delete_missing_task_is_not_found(client):
    response = await client.delete("/api/tasks/12345")

    assert response.status_code == 404
    assert response.json() == {"error": "Task '12345' not found"}
