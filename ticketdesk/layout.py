from __future__ import annotations

import html
import logging

import streamlit as st

from ticketdesk.app_state import get_auth
from ticketdesk.auth import AuthSession
from ticketdesk.routes import LOGIN_PATH, nav_groups, resolve_route, routes_by_path
from ticketdesk.ui import html_block, show_flashes

logger = logging.getLogger(__name__)


def go_to(path: str) -> None:
    """Navigate to the page registered for a route path."""
    route = routes_by_path().get(path) or routes_by_path()["/"]
    st.switch_page(route.script)


def guard(path: str, *, with_sidebar: bool = True) -> AuthSession:
    """Run the route guard for ``path``; stops the script unless it may render."""
    auth = get_auth()
    decision = resolve_route(path, auth.user, auth.loading)
    if decision.kind == "loading":
        st.info("Loading...")
        st.stop()
    if decision.kind == "redirect":
        logger.debug("Redirecting %s -> %s", decision.path, decision.target)
        go_to(decision.target)
        st.stop()
    if with_sidebar and auth.is_authenticated:
        render_sidebar(auth)
    show_flashes()
    return auth


def render_sidebar(auth: AuthSession) -> None:
    user = auth.user
    with st.sidebar:
        html_block(
            '<div class="td-user-chip">'
            f'<div class="td-user-avatar">{html.escape(user.initial)}</div>'
            "<div>"
            f'<div class="td-user-name">{html.escape(user.name or user.email)}</div>'
            f'<div class="td-user-role">{html.escape(user.role.label if user.role else "-")}</div>'
            "</div></div>"
        )
        for group, routes in nav_groups(user).items():
            if group:
                st.caption(group.upper())
            for route in routes:
                st.page_link(route.script, label=route.title, icon=route.icon)
        st.divider()
        if st.button("Logout", key="sidebar_logout", use_container_width=True):
            auth.logout()
            go_to(LOGIN_PATH)
