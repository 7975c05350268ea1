import streamlit as st

from tuesday.core.config import get_settings
from tuesday.core.constants import UserRole
from tuesday.core.exceptions.base import AppException
from tuesday.core.logger import setup_logger
from tuesday.schemas.user import UserWithMemberships
from tuesday.services.api_client import TuesdayClient, get_api_client
from tuesday.utils.async_helpers import run_async


def _load_users(client: TuesdayClient) -> list[UserWithMemberships]:
    try:
        return run_async(client.list_users())
    except AppException as e:
        st.error(f"Failed to load users: {e.message}")
        return []


def _render_user_picker(users: list[UserWithMemberships]) -> UserWithMemberships | None:
    """Sidebar "Acting as" selector; the choice scopes which boards are visible."""
    if not users:
        st.session_state["acting_user_id"] = None
        st.caption("No users yet - create one in the Admin panel.")
        return None

    by_id = {u.id: u for u in users}
    current = st.session_state.get("acting_user_id")
    ids = list(by_id)
    index = ids.index(current) if current in by_id else 0

    selected = st.selectbox(
        "Acting as",
        ids,
        index=index,
        format_func=lambda uid: f"{by_id[uid].name} ({by_id[uid].role})",
    )
    st.session_state["acting_user_id"] = selected
    return by_id[selected]


def main():
    settings = get_settings()
    setup_logger(debug=settings.debug)

    st.set_page_config(
        page_title=settings.app_name,
        page_icon="📋",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    client = get_api_client()
    if not run_async(client.health()):
        st.error(f"Cannot reach the {settings.app_name} API at {settings.api_base_url}.")
        st.stop()

    users = _load_users(client)
    st.session_state["users"] = users

    with st.sidebar:
        st.markdown(f"### {settings.app_name}")
        acting_user = _render_user_picker(users)
        if acting_user and acting_user.memberships:
            teams = ", ".join(m.team.name for m in acting_user.memberships)
            st.caption(f"Teams: {teams}")

    from tuesday.pages import admin, boards, weekly_overview

    pages = {
        "Workspace": [
            st.Page(boards.render, title="Boards", icon="📋", default=True, url_path="boards"),
            st.Page(
                weekly_overview.render,
                title="Weekly Overview",
                icon="📅",
                url_path="weekly-overview",
            ),
        ],
    }
    # The admin console is open while bootstrapping (no users) and to administrators
    if not users or (acting_user and acting_user.role == UserRole.ADMIN):
        pages["Admin"] = [
            st.Page(admin.render, title="Admin Panel", icon="🛡️", url_path="admin"),
        ]

    nav = st.navigation(pages)
    nav.run()


if __name__ == "__main__":
    main()
