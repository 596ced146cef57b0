from typing import Optional

import streamlit as st

from ticketdesk import master_repo
from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.forms import (
    DAY_LABELS,
    FormError,
    build_recurring_config_payload,
    format_days,
    format_time_of_day,
    parse_time_of_day,
)
from ticketdesk.layout import guard
from ticketdesk.models import TaskConfig
from ticketdesk.routes import MASTER_RECURRING_PATH, can_edit_recurring_configs
from ticketdesk.ui import (
    action_button,
    action_submit,
    active_badge,
    alert,
    busy,
    card,
    confirm_button,
    flash,
    html_block,
)

auth = guard(MASTER_RECURRING_PATH)
client = get_client()
can_edit = can_edit_recurring_configs(auth.user)


@st.dialog("Recurring Task")
def config_dialog(edit: Optional[TaskConfig] = None):
    st.subheader("Edit Configuration" if edit else "Add Configuration")
    with st.form("recurring_config_form"):
        title = st.text_input("Title *", value=edit.title if edit else "")
        description = st.text_area("Description", value=(edit.description or "") if edit else "")
        location = st.text_input("Location", value=(edit.location or "") if edit else "")
        sub_location = st.text_input("Sub location", value=(edit.sub_location or "") if edit else "")
        days = st.multiselect(
            "Repeat on",
            options=list(DAY_LABELS),
            default=edit.day_codes if edit else [],
            format_func=lambda d: DAY_LABELS[d],
        )
        time_of_day = st.time_input(
            "Due time (that day)",
            value=parse_time_of_day(edit.time_of_day if edit else None),
            step=900,
        )
        is_active = st.checkbox(
            "Active (tasks are generated on the selected days)",
            value=edit.is_active if edit else True,
        )
        submitted = action_submit("Save", "config_form", type="primary")

    if submitted:
        try:
            with busy("config_form", "Saving..."):
                payload = build_recurring_config_payload(
                    title,
                    days,
                    format_time_of_day(time_of_day),
                    description,
                    location,
                    sub_location,
                    is_active,
                )
                if edit is not None:
                    master_repo.update_task_config(client, edit.id, payload)
                else:
                    master_repo.create_task_config(client, payload)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Failed to save")
        else:
            flash("Configuration updated" if edit else "Configuration added")
            st.rerun()


head_l, head_r = st.columns([3, 2])
with head_l:
    st.title("🔁 Master Data - Recurring Task")
if can_edit:
    with head_r:
        b1, b2 = st.columns(2)
        with b1:
            if action_button("Generate Today", "run_today", use_container_width=True):
                try:
                    with busy("run_today", "Generating..."):
                        count = master_repo.run_recurring_today(client)
                except ApiError as exc:
                    st.toast(exc.message, icon="🚨")
                else:
                    st.toast(f"{count} task(s) generated for today", icon="✅")
        with b2:
            if st.button("➕ Add", type="primary", use_container_width=True):
                config_dialog()

try:
    configs = master_repo.list_task_configs(client)
    error = ""
except ApiError as exc:
    configs, error = [], exc.message

alert(error)

widths = [3, 3, 1, 2, 1.2, 3] if can_edit else [3, 3, 1, 2, 1.2]
labels = ["Title", "Days", "Time", "Location", "Status", "Actions"][: len(widths)]

with card():
    if not configs:
        if not error:
            st.info("No recurring configurations yet.")
    else:
        for col, label in zip(st.columns(widths), labels):
            col.markdown(f"**{label}**")
        for c in configs:
            row = st.columns(widths)
            row[0].write(c.title)
            row[1].write(format_days(c.days))
            row[2].write(c.time_of_day or "-")
            row[3].write(c.location_label)
            with row[4]:
                html_block(active_badge(c.is_active))
            if not can_edit:
                continue
            with row[5]:
                a1, a2, a3 = st.columns(3)
                with a1:
                    if action_button("Deactivate" if c.is_active else "Activate", f"toggle_cfg_{c.id}"):
                        try:
                            with busy(f"toggle_cfg_{c.id}", "Saving..."):
                                master_repo.set_task_config_active(client, c.id, not c.is_active)
                        except ApiError as exc:
                            st.toast(exc.message, icon="🚨")
                        else:
                            flash("Configuration deactivated" if c.is_active else "Configuration activated")
                            st.rerun()
                with a2:
                    if st.button("Edit", key=f"edit_cfg_{c.id}"):
                        config_dialog(c)
                with a3:
                    if confirm_button(f"delete_cfg_{c.id}", "Delete", "Delete this configuration?"):
                        try:
                            with busy(f"delete_cfg_{c.id}", "Deleting..."):
                                master_repo.delete_task_config(client, c.id)
                        except ApiError as exc:
                            st.toast(exc.message, icon="🚨")
                        else:
                            flash("Configuration deleted")
                            st.rerun()
