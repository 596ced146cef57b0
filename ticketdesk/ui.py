"""Small presentational helpers shared by the pages."""

from __future__ import annotations

import html
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import pandas as pd
import streamlit as st

from ticketdesk.models import parse_datetime, status_label, type_label


def _code(value: Any) -> Any:
    return int(value) if isinstance(value, int) else value


def badge(text: str, css_class: str) -> str:
    return f'<span class="td-badge {css_class}">{html.escape(text)}</span>'


def status_badge(status: Any) -> str:
    return badge(status_label(status), f"td-badge-{_code(status)}")


def type_badge(task_type: Any) -> str:
    return badge(type_label(task_type), f"td-badge-type-{_code(task_type) or 1}")


def active_badge(is_active: bool) -> str:
    return badge("Active" if is_active else "Inactive", "td-badge-active" if is_active else "td-badge-inactive")


def html_block(markup: str) -> None:
    st.markdown(markup, unsafe_allow_html=True)


def alert(message: Optional[str], kind: str = "error") -> None:
    if not message:
        return
    icon = {"error": "🚨", "warning": "⚠️", "info": "ℹ️", "success": "✅"}.get(kind, "ℹ️")
    getattr(st, kind, st.info)(message, icon=icon)


@contextmanager
def card(title: Optional[str] = None, icon: str = "") -> Iterator[Any]:
    with st.container(border=True) as box:
        if title:
            st.subheader(f"{icon} {title}".strip())
        yield box


def kpi_card(label: str, value: int, variant: str = "1") -> None:
    html_block(
        f'<div class="td-kpi td-kpi-{variant}">'
        f'<div class="td-kpi-value">{int(value)}</div>'
        f'<div class="td-kpi-label">{html.escape(label)}</div>'
        "</div>"
    )


def data_table(df: pd.DataFrame, *, empty_text: str = "No data", height: Optional[int] = None) -> None:
    if df.empty:
        st.caption(empty_text)
        return
    kwargs = {"hide_index": True, "use_container_width": True}
    if height:
        kwargs["height"] = height
    st.dataframe(df, **kwargs)


def format_date(raw: Optional[str], with_time: bool = False) -> str:
    value = parse_datetime(raw)
    if value is None:
        return "-"
    return value.strftime("%d %b %Y %H:%M" if with_time else "%d %b %Y")


# ---------------- Busy flags ----------------
#
# A click only sets the flag (widget callbacks run before the script). The
# following run draws the control disabled and performs the call inside
# ``busy()``, which clears the flag when the call returns.

def _busy_key(key: str) -> str:
    return f"busy::{key}"


def is_busy(key: str) -> bool:
    return bool(st.session_state.get(_busy_key(key), False))


def start_busy(key: str) -> None:
    st.session_state[_busy_key(key)] = True


@contextmanager
def busy(key: str, message: str = "Processing..."):
    """Perform one backend call for ``key`` and release the flag afterwards."""
    try:
        with st.spinner(message):
            yield
    finally:
        st.session_state[_busy_key(key)] = False


def action_button(label: str, key: str, **kwargs: Any) -> bool:
    """Button that is disabled while its action runs.

    Returns True in the run that should perform the action; wrap the call in
    ``busy(key)``.
    """
    disabled = kwargs.pop("disabled", False)
    st.button(
        label,
        key=f"{key}::btn",
        disabled=disabled or is_busy(key),
        on_click=start_busy,
        args=(key,),
        **kwargs,
    )
    return is_busy(key)


def action_submit(label: str, key: str, **kwargs: Any) -> bool:
    """``action_button`` for the submit button of an ``st.form``."""
    st.form_submit_button(label, disabled=is_busy(key), on_click=start_busy, args=(key,), **kwargs)
    return is_busy(key)


# ---------------- Confirmations ----------------

def _set_flag(name: str, value: bool) -> None:
    st.session_state[name] = value


def _confirm(key: str) -> None:
    st.session_state[f"confirm::{key}"] = False
    start_busy(key)


def confirm_button(key: str, label: str, prompt: str, *, disabled: bool = False) -> bool:
    """Two-click confirmation.

    Returns True in the run that should perform the confirmed action, with
    the button drawn disabled; wrap the call in ``busy(key)``.
    """
    pending_key = f"confirm::{key}"
    if is_busy(key):
        st.button(label, key=f"{key}::ask", disabled=True)
        return True
    if not st.session_state.get(pending_key):
        st.button(label, key=f"{key}::ask", disabled=disabled, on_click=_set_flag, args=(pending_key, True))
        return False

    st.warning(prompt)
    c1, c2 = st.columns(2)
    with c1:
        st.button("Yes", key=f"{key}::yes", type="primary", on_click=_confirm, args=(key,))
    with c2:
        st.button("Cancel", key=f"{key}::no", on_click=_set_flag, args=(pending_key, False))
    return False


def flash(message: str, icon: str = "✅") -> None:
    """Queue a toast that survives the next rerun."""
    st.session_state.setdefault("flash::messages", []).append((message, icon))


def show_flashes() -> None:
    for message, icon in st.session_state.pop("flash::messages", []):
        st.toast(message, icon=icon)
