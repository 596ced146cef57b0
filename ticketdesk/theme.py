from pathlib import Path

import streamlit as st
from streamlit.errors import StreamlitAPIException

from ticketdesk.config import get_config

THEME_FILE = Path(__file__).resolve().parents[1] / "assets" / "custom_theme.css"


def set_theme(
    page_title: str = "",
    page_icon: str = "🎫",
    layout: str = "wide",
    initial_sidebar_state: str = "expanded",
):
    """Configure the Streamlit page and inject the admin stylesheet.

    ``page_title`` falls back to ``TICKETDESK_APP_TITLE``. Only the first
    page config of a run is accepted; the CSS is injected on every call.
    """
    try:
        st.set_page_config(
            page_title=page_title or get_config().app_title,
            page_icon=page_icon,
            layout=layout,
            initial_sidebar_state=initial_sidebar_state,
        )
    except StreamlitAPIException:
        pass

    try:
        css = THEME_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        st.error(f"Theme file not found at {THEME_FILE}.")
        return
    st.markdown(f"<style>{css}</style>", unsafe_allow_html=True)
