from datetime import date

import pandas as pd
import streamlit as st

from tuesday.core.exceptions.base import AppException
from tuesday.schemas.user import UserWithMemberships
from tuesday.services.api_client import get_api_client
from tuesday.utils.async_helpers import run_async
from tuesday.utils.week import format_week_range, get_week_start, shift_week

STATUS_BADGES = {
    "Working on it": "🟠",
    "Stuck": "🔴",
    "Done": "🟢",
    "Not Started": "⚪",
}


def _current_week_start() -> date:
    stored = st.session_state.get("overview_week_start")
    if stored:
        return date.fromisoformat(stored)
    return get_week_start(date.today())


def render():
    st.title("Weekly Overview")
    st.markdown("Team lead view by person and week.")

    users: list[UserWithMemberships] = st.session_state.get("users", [])
    if not users:
        st.info("No users yet.")
        return

    by_id = {u.id: u for u in users}
    default_id = st.session_state.get("overview_user_id") or st.session_state.get("acting_user_id")
    ids = list(by_id)
    index = ids.index(default_id) if default_id in by_id else 0

    col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
    user_id = col1.selectbox(
        "Person",
        ids,
        index=index,
        format_func=lambda uid: by_id[uid].name,
    )
    st.session_state["overview_user_id"] = user_id

    week_start = _current_week_start()
    if col2.button("◀ Previous", use_container_width=True):
        week_start = shift_week(week_start, -1)
    if col3.button("This week", use_container_width=True):
        week_start = get_week_start(date.today())
    if col4.button("Next ▶", use_container_width=True):
        week_start = shift_week(week_start, 1)
    st.session_state["overview_week_start"] = week_start.isoformat()

    try:
        overview = run_async(get_api_client().weekly_overview(user_id, week_start.isoformat()))
    except AppException as e:
        st.error(f"Failed to load weekly overview: {e.message}")
        return

    st.subheader(f"{overview.user.name} · {format_week_range(overview.week_start, overview.week_end)}")

    day_columns = st.columns(len(overview.days))
    for col, day in zip(day_columns, overview.days):
        with col:
            st.markdown(f"**{day.weekday}**")
            st.caption(day.date)
            if not day.tasks:
                st.caption("No tasks")
            for task in day.tasks:
                badge = STATUS_BADGES.get(task.status, "⚪")
                st.markdown(f"{badge} {task.title or '(untitled)'}")
                st.caption(f"{task.board_title} / {task.column_title}")

    rows = [
        {
            "Day": day.weekday,
            "Task": task.title,
            "Status": task.status,
            "Board": task.board_title,
            "Group": task.column_title,
            "Deadline": task.deadline,
        }
        for day in overview.days
        for task in day.tasks
    ]
    if rows:
        st.markdown("---")
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
