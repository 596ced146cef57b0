import streamlit as st

from ticketdesk.config import get_config
from ticketdesk.logging_config import configure_logging
from ticketdesk.routes import ROOT_PATH, get_routes
from ticketdesk.theme import set_theme

configure_logging(get_config().log_level)
set_theme()


def _url_path(path: str) -> str:
    return path.strip("/").replace("/", "-")


pages = [
    st.Page(
        route.script,
        title=route.title,
        icon=route.icon,
        url_path=None if route.path == ROOT_PATH else _url_path(route.path),
        default=route.path == ROOT_PATH,
    )
    for route in get_routes()
]

# Sidebar links are drawn by the layout guard so they can follow the user's role.
st.navigation(pages, position="hidden").run()
