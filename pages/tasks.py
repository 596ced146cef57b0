from datetime import time

import pandas as pd
import streamlit as st

from ticketdesk import tasks_repo
from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.export import (
    ALL_STATUSES,
    EXCEL_MIME,
    EXPORT_PRESETS,
    build_export_filters,
    export_file_name,
    preset_range,
    reset_export_form,
)
from ticketdesk.forms import FormError, build_task_payload
from ticketdesk.layout import guard
from ticketdesk.models import STATUS_LABELS, Task, TaskStatus
from ticketdesk.routes import (
    ROOT_PATH,
    can_create_task,
    can_delete_task,
    can_export_tasks,
    can_update_status,
)
from ticketdesk.task_status import (
    EVIDENCE_EXTENSIONS,
    EvidenceFile,
    EvidenceRequiredError,
    StatusUpdateError,
    change_status,
    needs_evidence,
)
from ticketdesk.ui import (
    alert,
    action_button,
    action_submit,
    busy,
    card,
    confirm_button,
    flash,
    format_date,
    html_block,
    status_badge,
    type_badge,
)

auth = guard(ROOT_PATH)
client = get_client()
user = auth.user


def load_tasks():
    try:
        return tasks_repo.list_tasks(client), ""
    except ApiError as exc:
        st.toast(exc.message, icon="🚨")
        return [], exc.message


# ----- Dialogs -----

@st.dialog("Create Task")
def create_task_dialog():
    with st.form("create_task_form"):
        title = st.text_input("Title *")
        description = st.text_area("Description")
        c1, c2 = st.columns(2)
        with c1:
            due_date = st.date_input("Due date", value=None, format="YYYY-MM-DD")
        with c2:
            due_time = st.time_input("Due time", value=time(9, 0), step=900)
        location = st.text_input("Location", placeholder="Type a location")
        sub_location = st.text_input("Sub location", placeholder="Type a sub location")
        submitted = action_submit("Save", "create_task", type="primary")

    if submitted:
        try:
            with busy("create_task", "Saving..."):
                payload = build_task_payload(title, description, due_date, due_time, location, sub_location)
                tasks_repo.create_task(client, payload)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Failed to create task")
        else:
            flash("Task created")
            st.rerun()


@st.dialog("Update Task Status")
def status_dialog(task: Task):
    st.caption(task.title)
    options = [int(s) for s in TaskStatus]
    current = int(task.status) if task.status in options else int(TaskStatus.TODO)
    status = st.selectbox(
        "Status",
        options=options,
        index=options.index(current),
        format_func=lambda s: STATUS_LABELS[s],
        key=f"status_select_{task.id}",
    )
    if task.evidence_url:
        st.markdown(f"Evidence: [View]({task.evidence_url})")

    uploaded = None
    if needs_evidence(task, status):
        uploaded = st.file_uploader(
            "Evidence image *",
            type=list(EVIDENCE_EXTENSIONS),
            key=f"evidence_{task.id}",
        )

    c1, c2 = st.columns(2)
    with c1:
        save = action_button("Save", f"status_{task.id}", type="primary")
    with c2:
        if st.button("Cancel", key=f"status_cancel_{task.id}"):
            st.rerun()

    if save:
        evidence = EvidenceFile.from_upload(uploaded) if uploaded is not None else None
        try:
            with busy(f"status_{task.id}", "Saving..."):
                change_status(client, task, status, evidence)
        except EvidenceRequiredError as exc:
            alert(str(exc))
        except StatusUpdateError as exc:
            if exc.evidence_uploaded:
                alert(f"Evidence was saved but the status was not updated: {exc.message}. Please try again.")
            else:
                alert(exc.message or "Failed to update status")
        except ApiError as exc:
            alert(exc.message or "Failed to upload evidence")
        else:
            flash("Status updated")
            st.rerun()


def reset_export_state():
    reset_export_form(st.session_state)


def _downloaded():
    reset_export_state()
    flash("Excel downloaded")


@st.dialog("Export Excel")
def export_dialog():
    st.caption("Filter tasks by created date and status. Leave the dates empty to export all dates.")
    if "export_statuses" not in st.session_state:
        reset_export_state()

    preset_cols = st.columns(len(EXPORT_PRESETS))
    for col, preset in zip(preset_cols, EXPORT_PRESETS):
        with col:
            if st.button(preset.label, key=f"preset_{preset.label}", use_container_width=True):
                st.session_state.export_from, st.session_state.export_to = preset_range(preset.label)

    c1, c2 = st.columns(2)
    with c1:
        date_from = st.date_input("From", key="export_from", format="YYYY-MM-DD")
    with c2:
        date_to = st.date_input("To", key="export_to", format="YYYY-MM-DD")
    statuses = st.multiselect(
        "Status",
        options=list(ALL_STATUSES),
        key="export_statuses",
        format_func=lambda s: STATUS_LABELS[s],
    )

    if action_button("Export", "export", type="primary"):
        try:
            with busy("export", "Exporting..."):
                filters = build_export_filters(date_from, date_to, statuses)
                content = tasks_repo.export_tasks_excel(client, filters)
        except (FormError, ApiError) as exc:
            st.toast(str(exc) or "Export failed", icon="🚨")
        else:
            st.session_state.export_blob = content

    blob = st.session_state.get("export_blob")
    if blob:
        st.download_button(
            "Download Excel",
            data=blob,
            file_name=export_file_name(),
            mime=EXCEL_MIME,
            type="primary",
            on_click=_downloaded,
        )


def render_detail(task: Task):
    with card(task.title, "🔎"):
        html_block(f"{type_badge(task.type)} &nbsp; {status_badge(task.status)}")
        st.markdown(f"**Description**  \n{task.description or '-'}")
        c1, c2, c3 = st.columns(3)
        c1.markdown(f"**Location**  \n{task.location_label}")
        c2.markdown(f"**Start date**  \n{format_date(task.start_date, with_time=True)}")
        c3.markdown(f"**Due date**  \n{format_date(task.due_date, with_time=True)}")
        c1.markdown(f"**Created**  \n{format_date(task.created_at, with_time=True)}")
        c2.markdown(f"**Updated**  \n{format_date(task.updated_at, with_time=True)}")
        if task.evidence_url:
            st.markdown("**Evidence**")
            st.image(task.evidence_url, width=360)
            st.markdown(f"[Open full size]({task.evidence_url})")


# ----- Page -----

tasks, error = load_tasks()

head_l, head_r = st.columns([3, 2])
with head_l:
    st.title("📋 Task List")
with head_r:
    b1, b2 = st.columns(2)
    with b1:
        if can_export_tasks(user) and st.button(
            "📗 Export Excel", use_container_width=True, on_click=reset_export_state
        ):
            export_dialog()
    with b2:
        if can_create_task(user) and st.button("➕ Create Task", type="primary", use_container_width=True):
            create_task_dialog()

alert(error)

if not tasks:
    if not error:
        st.info("No tasks yet.")
    st.stop()

df = pd.DataFrame(
    [
        {
            "Title": t.title,
            "Type": t.type_label,
            "Location": t.location_label,
            "Status": t.status_label,
            "Due Date": format_date(t.due_date),
        }
        for t in tasks
    ]
)
st.caption("Select a row to see details and actions.")
event = st.dataframe(
    df,
    hide_index=True,
    use_container_width=True,
    on_select="rerun",
    selection_mode="single-row",
    key="tasks_table",
)

rows = event.selection.rows if event is not None else []
if rows:
    selected = tasks[rows[0]]
    render_detail(selected)

    if not selected.is_done:
        a1, a2, _ = st.columns([1, 1, 3])
        with a1:
            if can_update_status(user) and st.button("✏️ Update Status", key=f"open_status_{selected.id}"):
                status_dialog(selected)
        with a2:
            if can_delete_task(user) and confirm_button(
                f"delete_task_{selected.id}", "🗑️ Delete", "Delete this task?"
            ):
                try:
                    with busy(f"delete_task_{selected.id}", "Deleting..."):
                        tasks_repo.delete_task(client, selected.id)
                except ApiError as exc:
                    st.toast(exc.message, icon="🚨")
                else:
                    flash("Task deleted")
                    st.rerun()
    else:
        st.caption("Done tasks can no longer be changed.")
