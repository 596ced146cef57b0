from typing import Optional

import streamlit as st

from ticketdesk import master_repo
from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.forms import FormError, build_user_payload
from ticketdesk.layout import guard
from ticketdesk.models import ROLE_LABELS, Role, User
from ticketdesk.routes import MASTER_USERS_PATH
from ticketdesk.ui import action_submit, alert, busy, card, confirm_button, flash

guard(MASTER_USERS_PATH)
client = get_client()

ROLE_OPTIONS = [r.value for r in Role]


@st.dialog("User")
def user_dialog(edit: Optional[User] = None):
    st.subheader("Edit User" if edit else "Add User")
    with st.form("user_form"):
        email = st.text_input("Email *", value=edit.email if edit else "")
        password = st.text_input(
            "Password" + (" (leave blank to keep)" if edit else " *"),
            type="password",
        )
        name = st.text_input("Name", value=edit.name if edit else "")
        current_role = edit.role.value if edit and edit.role else Role.ASSET.value
        role = st.selectbox(
            "Role",
            options=ROLE_OPTIONS,
            index=ROLE_OPTIONS.index(current_role),
            format_func=lambda r: ROLE_LABELS[Role(r)],
        )
        submitted = action_submit("Save", "user_form", type="primary")

    if submitted:
        try:
            with busy("user_form", "Saving..."):
                payload = build_user_payload(email, name, role, password, is_edit=edit is not None)
                if edit is not None:
                    master_repo.update_user(client, edit.id, payload)
                else:
                    master_repo.register_user(client, payload)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Failed to save")
        else:
            flash("User updated" if edit else "User added")
            st.rerun()


head_l, head_r = st.columns([4, 1])
with head_l:
    st.title("👥 Master Data - Users")
with head_r:
    if st.button("➕ Add", type="primary", use_container_width=True):
        user_dialog()

try:
    users = master_repo.list_users(client)
    error = ""
except ApiError as exc:
    users, error = [], exc.message

alert(error)

with card():
    if not users:
        if not error:
            st.info("No users yet.")
    else:
        header = st.columns([3, 3, 2, 2])
        for col, label in zip(header, ["Email", "Name", "Role", "Actions"]):
            col.markdown(f"**{label}**")
        for u in users:
            row = st.columns([3, 3, 2, 2])
            row[0].write(u.email)
            row[1].write(u.name)
            row[2].write(u.role.value if u.role else "-")
            with row[3]:
                a1, a2 = st.columns(2)
                with a1:
                    if st.button("Edit", key=f"edit_user_{u.id}"):
                        user_dialog(u)
                with a2:
                    if confirm_button(f"delete_user_{u.id}", "Delete", f"Delete user {u.email}?"):
                        try:
                            with busy(f"delete_user_{u.id}", "Deleting..."):
                                master_repo.delete_user(client, u.id)
                        except ApiError as exc:
                            st.toast(exc.message, icon="🚨")
                        else:
                            flash("User deleted")
                            st.rerun()
