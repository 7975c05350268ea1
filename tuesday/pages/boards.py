import html
from datetime import date

import pandas as pd
import streamlit as st
from loguru import logger

from tuesday.core.constants import TaskStatus
from tuesday.core.exceptions.base import AppException
from tuesday.core.exceptions.domain import AuthorizationError
from tuesday.schemas.board import BoardDetailResponse, ColumnResponse
from tuesday.schemas.user import UserWithMemberships
from tuesday.services.api_client import TuesdayClient, get_api_client
from tuesday.utils.async_helpers import run_async
from tuesday.utils.metrics import (
    board_tasks,
    calculate_status_distribution,
    completion_ratio,
    get_overdue_tasks,
)

STATUS_OPTIONS = [s.value for s in TaskStatus]
UNASSIGNED_LABEL = "—"


def _user_label(user: UserWithMemberships) -> str:
    return f"{user.name} (#{user.id})"


def render():
    st.title("Boards")

    client = get_api_client()
    users: list[UserWithMemberships] = st.session_state.get("users", [])
    user_id = st.session_state.get("acting_user_id")

    try:
        boards = run_async(client.list_boards(user_id))
    except AppException as e:
        st.error(f"Failed to load boards: {e.message}")
        return

    _render_create_board(client)

    if not boards:
        st.info("No boards yet. Create one above.")
        return

    labels = {b.id: b.title + (f"  ·  {b.team.name}" if b.team else "") for b in boards}
    board_id = st.selectbox(
        "Board",
        list(labels),
        format_func=lambda bid: labels[bid],
        key="selected_board_id",
    )

    try:
        board = run_async(client.get_board(board_id, user_id))
    except AuthorizationError as e:
        st.warning(e.message)
        return
    except AppException as e:
        st.error(f"Failed to load board: {e.message}")
        return

    st.header(board.title)
    st.caption(f"Visible to: {board.team.name if board.team else 'everyone'}")

    _render_board_summary(board)

    for column in board.columns:
        _render_column(client, column, users)

    _render_add_column(client, board.id)
    _render_delete_board(client, board)


def _render_create_board(client: TuesdayClient):
    with st.expander("Create new board"):
        with st.form("create_board_form", clear_on_submit=True):
            title = st.text_input("Board title", placeholder="e.g. Q1 Roadmap")
            submitted = st.form_submit_button("Create Board")

        if submitted:
            if not title.strip():
                st.error("Board title is required.")
                return
            try:
                board = run_async(client.create_board(title.strip()))
            except AppException as e:
                st.error(e.message)
                return
            st.session_state["selected_board_id"] = board.id
            st.success(f"Board '{board.title}' created.")
            st.rerun()


def _render_board_summary(board: BoardDetailResponse):
    tasks = board_tasks(board)
    if not tasks:
        return

    distribution = calculate_status_distribution(tasks)
    overdue = get_overdue_tasks(tasks)

    cols = st.columns(len(distribution) + 2)
    for col, (status, count) in zip(cols, distribution.items()):
        col.metric(status, count)
    cols[-2].metric("Overdue", len(overdue))
    cols[-1].metric("Done", f"{completion_ratio(tasks):.0%}")


def _task_frame(column: ColumnResponse, users_by_id: dict[int, UserWithMemberships]) -> pd.DataFrame:
    rows = [
        {
            "id": task.id,
            "Task": task.title,
            "Assignee": (
                _user_label(users_by_id[task.assignee_id])
                if task.assignee_id in users_by_id
                else UNASSIGNED_LABEL
            ),
            "Owner": task.owner,
            "Status": task.status,
            "Deadline": date.fromisoformat(task.deadline) if task.deadline else None,
        }
        for task in column.tasks
    ]
    frame = pd.DataFrame(rows, columns=["id", "Task", "Assignee", "Owner", "Status", "Deadline"])
    return frame.set_index("id")


def _deadline_value(value) -> str | None:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        value = value.date()
    return value.isoformat()


def _diff_rows(
    before: pd.Series,
    after: pd.Series,
    user_ids_by_label: dict[str, int],
) -> dict:
    """Changed fields between two task rows, as update_task keyword arguments."""
    changes: dict = {}
    if after["Task"] != before["Task"]:
        changes["title"] = after["Task"] or ""
    if after["Status"] != before["Status"]:
        changes["status"] = after["Status"]
    if _deadline_value(after["Deadline"]) != _deadline_value(before["Deadline"]):
        changes["deadline"] = _deadline_value(after["Deadline"])
    if after["Assignee"] != before["Assignee"]:
        changes["assignee_id"] = user_ids_by_label.get(after["Assignee"])
    return changes


def _render_column(client: TuesdayClient, column: ColumnResponse, users: list[UserWithMemberships]):
    st.markdown(
        f"<h4 style='color:{html.escape(column.color)}'>{html.escape(column.title)}</h4>",
        unsafe_allow_html=True,
    )

    users_by_id = {u.id: u for u in users}
    user_ids_by_label = {_user_label(u): u.id for u in users}
    frame = _task_frame(column, users_by_id)

    if frame.empty:
        st.caption("No tasks in this group yet.")
    else:
        edited = st.data_editor(
            frame,
            key=f"tasks_{column.id}",
            use_container_width=True,
            num_rows="fixed",
            disabled=["Owner"],
            column_config={
                "Task": st.column_config.TextColumn("Task", width="large"),
                "Assignee": st.column_config.SelectboxColumn(
                    "Assignee", options=[UNASSIGNED_LABEL, *user_ids_by_label]
                ),
                "Status": st.column_config.SelectboxColumn(
                    "Status", options=STATUS_OPTIONS, required=True
                ),
                "Deadline": st.column_config.DateColumn("Deadline", format="YYYY-MM-DD"),
            },
        )

        # The editor already shows the new values; persist them and report failures
        changed = False
        for task_id in frame.index:
            changes = _diff_rows(frame.loc[task_id], edited.loc[task_id], user_ids_by_label)
            if not changes:
                continue
            try:
                run_async(client.update_task(int(task_id), **changes))
                changed = True
            except AppException as e:
                logger.error(f"Task update failed: id={task_id}, changes={changes}: {e.message}")
                st.error(f"Could not save task #{task_id}: {e.message}")
        if changed:
            st.rerun()

    with st.expander(f"Manage '{column.title}'"):
        _render_add_task(client, column, users)
        if column.tasks:
            _render_delete_task(client, column)
        _render_edit_column(client, column)


def _render_add_task(client: TuesdayClient, column: ColumnResponse, users: list[UserWithMemberships]):
    with st.form(f"add_task_{column.id}", clear_on_submit=True):
        title = st.text_input("Task name", key=f"new_task_title_{column.id}")
        assignee_id = st.selectbox(
            "Assignee",
            [None, *(u.id for u in users)],
            format_func=lambda uid: UNASSIGNED_LABEL if uid is None else _user_label(
                next(u for u in users if u.id == uid)
            ),
            key=f"new_task_assignee_{column.id}",
        )
        status = st.selectbox("Status", STATUS_OPTIONS, key=f"new_task_status_{column.id}")
        deadline = st.date_input("Deadline", value=None, key=f"new_task_deadline_{column.id}")
        submitted = st.form_submit_button("Add Task")

    if submitted:
        try:
            run_async(
                client.create_task(
                    column.id,
                    title=title,
                    assignee_id=assignee_id,
                    status=status,
                    deadline=deadline.isoformat() if deadline else None,
                )
            )
        except AppException as e:
            st.error(e.message)
            return
        st.rerun()


def _render_delete_task(client: TuesdayClient, column: ColumnResponse):
    titles = {t.id: t.title or f"(untitled #{t.id})" for t in column.tasks}
    col1, col2 = st.columns([3, 1])
    task_id = col1.selectbox(
        "Task",
        list(titles),
        format_func=lambda tid: titles[tid],
        key=f"delete_task_select_{column.id}",
    )
    if col2.button("Delete task", key=f"delete_task_{column.id}"):
        try:
            run_async(client.delete_task(task_id))
        except AppException as e:
            st.error(e.message)
            return
        st.rerun()


def _render_edit_column(client: TuesdayClient, column: ColumnResponse):
    st.markdown("---")
    with st.form(f"edit_column_{column.id}"):
        col1, col2 = st.columns([3, 1])
        title = col1.text_input("Group title", value=column.title, key=f"column_title_{column.id}")
        color = col2.color_picker("Color", value=column.color, key=f"column_color_{column.id}")
        submitted = st.form_submit_button("Save Group")

    if submitted:
        try:
            run_async(client.update_column(column.id, title=title, color=color))
        except AppException as e:
            st.error(e.message)
            return
        st.rerun()

    if st.button("Delete group", key=f"delete_column_{column.id}", type="secondary"):
        try:
            run_async(client.delete_column(column.id))
        except AppException as e:
            st.error(e.message)
            return
        st.rerun()


def _render_delete_board(client: TuesdayClient, board: BoardDetailResponse):
    with st.expander("Danger zone"):
        st.caption("Deleting a board removes all of its groups and tasks.")
        confirm = st.checkbox(f"I want to delete '{board.title}'", key=f"confirm_delete_{board.id}")
        if st.button("Delete board", disabled=not confirm, key=f"delete_board_{board.id}"):
            try:
                run_async(client.delete_board(board.id))
            except AppException as e:
                st.error(e.message)
                return
            st.session_state.pop("selected_board_id", None)
            st.rerun()


def _render_add_column(client: TuesdayClient, board_id: int):
    st.markdown("---")
    with st.form("add_column_form", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        title = col1.text_input("New group", placeholder="e.g. API Development")
        color = col2.color_picker("Color", value="#579bfc")
        submitted = st.form_submit_button("Add Group")

    if submitted:
        if not title.strip():
            st.error("Group title is required.")
            return
        try:
            run_async(client.create_column(board_id, title.strip(), color))
        except AppException as e:
            st.error(e.message)
            return
        st.rerun()
