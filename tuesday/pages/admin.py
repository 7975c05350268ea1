from collections.abc import Coroutine

import pandas as pd
import streamlit as st

from tuesday.core.constants import TeamRole, UserRole
from tuesday.core.exceptions.base import AppException
from tuesday.schemas.overview import AdminOverviewResponse
from tuesday.services.api_client import TuesdayClient, get_api_client
from tuesday.utils.async_helpers import run_async

USER_ROLES = [r.value for r in UserRole]
TEAM_ROLES = [r.value for r in TeamRole]
EVERYONE = "Everyone"


def _mutate(coro: Coroutine, success: str) -> None:
    """Run an admin mutation, then reload the page or show the error."""
    try:
        run_async(coro)
    except AppException as e:
        st.error(e.message)
        return
    st.success(success)
    st.rerun()


def render():
    st.title("Admin Panel")

    user = next(
        (u for u in st.session_state.get("users", []) if u.id == st.session_state.get("acting_user_id")),
        None,
    )
    if user and user.role != UserRole.ADMIN:
        st.error("You do not have permission to access this page.")
        return

    client = get_api_client()
    try:
        overview = run_async(client.admin_overview())
    except AppException as e:
        st.error(f"Failed to load admin data: {e.message}")
        return

    tab1, tab2, tab3 = st.tabs(["Users", "Teams", "Board Visibility"])

    with tab1:
        _render_users(client, overview, acting_user_id=user.id if user else None)

    with tab2:
        _render_teams(client, overview)

    with tab3:
        _render_board_visibility(client, overview)


def _render_users(client: TuesdayClient, overview: AdminOverviewResponse, acting_user_id: int | None):
    st.subheader("Add User")
    with st.form("create_user_form", clear_on_submit=True):
        col1, col2, col3 = st.columns([2, 2, 1])
        name = col1.text_input("Name")
        email = col2.text_input("Email", placeholder="name@example.com")
        role = col3.selectbox("Role", USER_ROLES, index=USER_ROLES.index(UserRole.MEMBER))
        submitted = st.form_submit_button("Create User")

    if submitted:
        if not name.strip() or not email.strip():
            st.error("Name and email are required.")
        else:
            _mutate(client.create_user(name, email, role), f"User '{name.strip()}' created.")

    st.markdown("---")
    st.subheader("All Users")

    if not overview.users:
        st.caption("No users yet.")
        return

    for u in overview.users:
        col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
        teams = ", ".join(f"{m.team.name} ({m.role})" for m in u.memberships) or "no teams"
        col1.write(f"**{u.name}** - {u.email} - {teams}")
        new_role = col2.selectbox(
            "Role",
            USER_ROLES,
            index=USER_ROLES.index(u.role) if u.role in USER_ROLES else 0,
            key=f"role_{u.id}",
            label_visibility="collapsed",
        )
        if new_role != u.role and col3.button("Save role", key=f"save_role_{u.id}"):
            _mutate(client.update_user_role(u.id, new_role), f"{u.name} is now {new_role}.")
        if u.id != acting_user_id:
            if col4.button("Delete", key=f"delete_user_{u.id}"):
                _mutate(client.delete_user(u.id), f"Deleted {u.email}")
        else:
            col4.caption("(you)")


def _render_teams(client: TuesdayClient, overview: AdminOverviewResponse):
    st.subheader("Create Team")
    with st.form("create_team_form", clear_on_submit=True):
        team_name = st.text_input("Team name")
        submitted = st.form_submit_button("Create Team")

    if submitted:
        if not team_name.strip():
            st.error("Team name is required.")
        else:
            _mutate(client.create_team(team_name), f"Team '{team_name.strip()}' created.")

    if not overview.teams:
        st.info("No teams yet.")
        return

    st.markdown("---")
    st.subheader("Assign Member")
    if not overview.users:
        st.caption("Create a user first.")
    else:
        users_by_id = {u.id: u for u in overview.users}
        teams_by_id = {t.id: t for t in overview.teams}
        with st.form("membership_form"):
            col1, col2, col3 = st.columns([2, 2, 1])
            user_id = col1.selectbox(
                "User", list(users_by_id), format_func=lambda uid: users_by_id[uid].name
            )
            team_id = col2.selectbox(
                "Team", list(teams_by_id), format_func=lambda tid: teams_by_id[tid].name
            )
            role = col3.selectbox("Team role", TEAM_ROLES, index=TEAM_ROLES.index(TeamRole.MEMBER))
            submitted = st.form_submit_button("Save Membership")

        if submitted:
            _mutate(
                client.save_membership(user_id, team_id, role),
                f"{users_by_id[user_id].name} is {role} of {teams_by_id[team_id].name}.",
            )

    st.markdown("---")
    st.subheader("Teams")
    for team in overview.teams:
        with st.expander(f"{team.name} ({len(team.memberships)} members)"):
            if not team.memberships:
                st.caption("No members.")
            for m in team.memberships:
                col1, col2 = st.columns([4, 1])
                col1.write(f"**{m.user.name}** - {m.user.email} - {m.role}")
                if col2.button("Remove", key=f"remove_{team.id}_{m.user_id}"):
                    _mutate(
                        client.delete_membership(m.user_id, team.id),
                        f"Removed {m.user.name} from {team.name}.",
                    )


def _render_board_visibility(client: TuesdayClient, overview: AdminOverviewResponse):
    st.subheader("Board Visibility")
    st.caption("Boards assigned to a team are only visible to its members and to admins.")

    if not overview.boards:
        st.info("No boards yet.")
        return

    team_names = {t.id: t.name for t in overview.teams}
    st.dataframe(
        pd.DataFrame(
            [
                {"Board": b.title, "Team": team_names.get(b.team_id, EVERYONE)}
                for b in overview.boards
            ]
        ),
        use_container_width=True,
        hide_index=True,
    )

    options = [None, *team_names]
    for board in overview.boards:
        col1, col2, col3 = st.columns([3, 2, 1])
        col1.write(f"**{board.title}**")
        team_id = col2.selectbox(
            "Team",
            options,
            index=options.index(board.team_id) if board.team_id in options else 0,
            format_func=lambda tid: EVERYONE if tid is None else team_names[tid],
            key=f"board_team_{board.id}",
            label_visibility="collapsed",
        )
        if team_id != board.team_id and col3.button("Save", key=f"save_board_team_{board.id}"):
            label = EVERYONE if team_id is None else team_names[team_id]
            _mutate(client.assign_board_team(board.id, team_id), f"'{board.title}' now visible to {label}.")
