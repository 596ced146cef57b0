import json

import pytest
import streamlit
from streamlit.testing.v1 import AppTest

from ticketdesk.config import reset_config

DASHBOARD_SCRIPT = "../pages/dashboard.py"


@pytest.fixture
def navigation(monkeypatch):
    calls = {"switch_page": [], "page_link": []}
    monkeypatch.delenv("TICKETDESK_SESSION_BACKEND", raising=False)
    monkeypatch.delenv("TICKETDESK_API_BASE_URL", raising=False)
    reset_config()
    monkeypatch.setattr(streamlit, "switch_page", lambda page: calls["switch_page"].append(page))
    monkeypatch.setattr(streamlit, "page_link", lambda page, **kw: calls["page_link"].append(page))
    yield calls
    reset_config()


def _signed_in(role):
    at = AppTest.from_file(DASHBOARD_SCRIPT, default_timeout=30)
    at.session_state["ticketdesk.token"] = "tok"
    at.session_state["ticketdesk.user"] = json.dumps(
        {"id": 1, "email": "u@example.com", "name": "U", "role": role}
    )
    return at


def test_vendor_is_sent_back_to_task_list(navigation):
    at = _signed_in("VENDOR").run()

    assert not at.exception
    assert navigation["switch_page"] == ["pages/tasks.py"]
    assert len(at.title) == 0


def test_signed_out_visitor_is_sent_to_login(navigation):
    at = AppTest.from_file(DASHBOARD_SCRIPT, default_timeout=30).run()

    assert not at.exception
    assert navigation["switch_page"] == ["pages/login.py"]
    assert len(at.title) == 0


def test_asset_user_sees_dashboard(navigation):
    at = _signed_in("ASSET").run()

    assert not at.exception
    assert navigation["switch_page"] == []
    assert at.title[0].value == "📊 Dashboard"
    assert "pages/master_recurring_config.py" in navigation["page_link"]
    assert "pages/master_users.py" not in navigation["page_link"]
