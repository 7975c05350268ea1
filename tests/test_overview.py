import pytest


@pytest.fixture
async def setup(make_user, make_board, make_column):
    ada = await make_user("Ada")
    board = await make_board("Launch")
    column = await make_column(board["id"], "API Development")
    return ada, board, column


async def test_week_buckets_monday_to_sunday(client, make_task, setup):
    ada, board, column = setup
    task = await make_task(
        column["id"], title="Contract tests", assigneeId=ada["id"], deadline="2026-02-25"
    )

    response = await client.get(
        "/api/overview/weekly", params={"userId": ada["id"], "weekStart": "2026-02-23"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"] == {"id": ada["id"], "name": "Ada"}
    assert body["weekStart"] == "2026-02-23"
    assert body["weekEnd"] == "2026-03-01"
    assert [d["weekday"] for d in body["days"]] == [
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    ]
    assert body["days"][0]["date"] == "2026-02-23"
    assert body["days"][6]["date"] == "2026-03-01"

    wednesday = body["days"][2]
    assert wednesday["date"] == "2026-02-25"
    assert wednesday["tasks"] == [
        {
            "id": task["id"],
            "title": "Contract tests",
            "status": "Not Started",
            "deadline": "2026-02-25",
            "boardId": board["id"],
            "boardTitle": "Launch",
            "columnId": column["id"],
            "columnTitle": "API Development",
        }
    ]
    assert all(day["tasks"] == [] for i, day in enumerate(body["days"]) if i != 2)


async def test_only_assigned_tasks_in_range_are_included(client, make_user, make_task, setup):
    ada, _, column = setup
    grace = await make_user("Grace")
    await make_task(column["id"], title="Before", assigneeId=ada["id"], deadline="2026-02-22")
    await make_task(column["id"], title="Sunday", assigneeId=ada["id"], deadline="2026-03-01")
    await make_task(column["id"], title="After", assigneeId=ada["id"], deadline="2026-03-02")
    await make_task(column["id"], title="Someone else", assigneeId=grace["id"], deadline="2026-02-24")
    await make_task(column["id"], title="No deadline", assigneeId=ada["id"])

    response = await client.get(
        "/api/overview/weekly", params={"userId": ada["id"], "weekStart": "2026-02-23"}
    )

    titles = [t["title"] for day in response.json()["days"] for t in day["tasks"]]
    assert titles == ["Sunday"]


async def test_mid_week_start_is_normalised_to_monday(client, setup):
    ada, _, _ = setup

    response = await client.get(
        "/api/overview/weekly", params={"userId": ada["id"], "weekStart": "2026-03-01"}
    )

    assert response.json()["weekStart"] == "2026-02-23"
    assert response.json()["weekEnd"] == "2026-03-01"


async def test_missing_week_start_uses_current_week(client, setup):
    ada, _, _ = setup

    response = await client.get("/api/overview/weekly", params={"userId": ada["id"]})

    assert response.status_code == 200
    assert len(response.json()["days"]) == 7
    assert response.json()["days"][0]["weekday"] == "Monday"


@pytest.mark.parametrize("week_start", ["Feb 23", "2026-2-23", "2026-02-31"])
async def test_malformed_week_start_is_rejected(client, setup, week_start):
    ada, _, _ = setup

    response = await client.get(
        "/api/overview/weekly", params={"userId": ada["id"], "weekStart": week_start}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "weekStart must be in YYYY-MM-DD format"}


async def test_user_is_required_and_must_exist(client):
    missing = await client.get("/api/overview/weekly")
    unknown = await client.get("/api/overview/weekly", params={"userId": 999})

    assert missing.status_code == 400
    assert missing.json() == {"error": "userId is required"}
    assert unknown.status_code == 404
