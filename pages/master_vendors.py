from typing import Dict, Optional

import streamlit as st

from ticketdesk import master_repo
from ticketdesk.api_client import ApiError
from ticketdesk.app_state import get_client
from ticketdesk.forms import FormError, build_sublocation_payload, build_vendor_payload
from ticketdesk.layout import guard
from ticketdesk.models import SubLocation, Vendor
from ticketdesk.routes import MASTER_VENDORS_PATH
from ticketdesk.ui import action_submit, alert, busy, card, confirm_button, flash

guard(MASTER_VENDORS_PATH)
client = get_client()


def _load(fetch):
    try:
        return fetch(client), ""
    except ApiError as exc:
        return [], exc.message


@st.dialog("Vendor")
def vendor_dialog(edit: Optional[Vendor] = None):
    with st.form("vendor_form"):
        name = st.text_input("Name *", value=edit.name if edit else "")
        submitted = action_submit("Save", "vendor_form", type="primary")

    if submitted:
        try:
            with busy("vendor_form", "Saving..."):
                payload = build_vendor_payload(name)
                master_repo.save_vendor(client, payload, edit.id if edit else None)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Failed to save")
        else:
            flash("Vendor updated" if edit else "Vendor added")
            st.rerun()


@st.dialog("Sub Location")
def sublocation_dialog(locations: Dict[object, str], edit: Optional[SubLocation] = None):
    options = list(locations)
    index = options.index(edit.location_id) if edit and edit.location_id in options else None
    with st.form("sublocation_form"):
        location_id = st.selectbox(
            "Location *",
            options=options,
            index=index,
            format_func=lambda i: locations.get(i, str(i)),
            placeholder="Choose a location",
        )
        name = st.text_input("Name *", value=edit.name if edit else "")
        submitted = action_submit("Save", "sublocation_form", type="primary")

    if submitted:
        try:
            with busy("sublocation_form", "Saving..."):
                payload = build_sublocation_payload(name, location_id)
                master_repo.save_sublocation(client, payload, edit.id if edit else None)
        except (FormError, ApiError) as exc:
            alert(str(exc) or "Failed to save")
        else:
            flash("Sub location updated" if edit else "Sub location added")
            st.rerun()


st.title("🏢 Master Data - Vendors & Locations")

tab_vendors, tab_subs = st.tabs(["Vendors", "Sub Locations"])

with tab_vendors:
    vendors, error = _load(master_repo.list_vendors)
    alert(error)
    if st.button("➕ Add Vendor", type="primary", key="add_vendor"):
        vendor_dialog()
    with card():
        if not vendors:
            if not error:
                st.info("No vendors yet.")
        for v in vendors:
            row = st.columns([6, 1, 1])
            row[0].write(v.name)
            with row[1]:
                if st.button("Edit", key=f"edit_vendor_{v.id}"):
                    vendor_dialog(v)
            with row[2]:
                if confirm_button(f"delete_vendor_{v.id}", "Delete", f"Delete vendor {v.name}?"):
                    try:
                        with busy(f"delete_vendor_{v.id}", "Deleting..."):
                            master_repo.delete_vendor(client, v.id)
                    except ApiError as exc:
                        st.toast(exc.message, icon="🚨")
                    else:
                        flash("Vendor deleted")
                        st.rerun()

with tab_subs:
    locations, loc_error = _load(master_repo.list_locations)
    subs, sub_error = _load(master_repo.list_sublocations)
    alert(loc_error or sub_error)
    location_names = {loc.id: loc.name for loc in locations}
    if st.button("➕ Add Sub Location", type="primary", key="add_sublocation", disabled=not locations):
        sublocation_dialog(location_names)
    with card():
        if not subs:
            if not sub_error:
                st.info("No sub locations yet.")
        else:
            for col, label in zip(st.columns([3, 3, 1, 1]), ["Location", "Name", "", ""]):
                col.markdown(f"**{label}**" if label else "")
        for s in subs:
            row = st.columns([3, 3, 1, 1])
            row[0].write(location_names.get(s.location_id, "-"))
            row[1].write(s.name)
            with row[2]:
                if st.button("Edit", key=f"edit_sub_{s.id}"):
                    sublocation_dialog(location_names, s)
            with row[3]:
                if confirm_button(f"delete_sub_{s.id}", "Delete", f"Delete sub location {s.name}?"):
                    try:
                        with busy(f"delete_sub_{s.id}", "Deleting..."):
                            master_repo.delete_sublocation(client, s.id)
                    except ApiError as exc:
                        st.toast(exc.message, icon="🚨")
                    else:
                        flash("Sub location deleted")
                        st.rerun()
