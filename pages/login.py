import html

import streamlit as st

from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.auth import sign_in
from ticketdesk.config import get_config
from ticketdesk.forms import FormError
from ticketdesk.layout import go_to, guard
from ticketdesk.routes import LOGIN_PATH, ROOT_PATH
from ticketdesk.ui import action_submit, alert, busy, html_block

auth = guard(LOGIN_PATH, with_sidebar=False)

_, center, _ = st.columns([1, 1.4, 1])
with center:
    html_block(
        '<div class="td-login-hero">'
        '<div style="font-size:2.4rem">🎫</div>'
        f"<h2>{html.escape(get_config().app_title)}</h2>"
        "<p>Sign in to the dashboard</p>"
        "</div>"
    )
    with st.form("login_form", border=True):
        email = st.text_input("Email", placeholder="email@example.com", autocomplete="email")
        password = st.text_input("Password", type="password", autocomplete="current-password")
        submitted = action_submit("Login", "login", type="primary", use_container_width=True)

    if submitted:
        try:
            with busy("login", "Signing in..."):
                if not email.strip() or not password:
                    raise FormError("Email and password are required")
                sign_in(get_client(), auth, email.strip(), password)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Login failed")
        else:
            go_to(ROOT_PATH)
