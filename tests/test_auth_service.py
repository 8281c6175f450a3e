# tests/test_auth_service.py
from __future__ import annotations

import pytest

from iustime.models.entities import User
from iustime.models.types import ViewState
from iustime.services.auth_service import MASTER_EMAIL, MASTER_PASSWORD, Session, authenticate


@pytest.fixture()
def users():
    return [
        User(id="a", name="Admin", email="boss@x.com", password="pw", role="ADMIN"),
        User(id="u", name="Ana", email="Ana@x.com", password="secret", role="USER", assigned_line_id="L1"),
    ]


def test_authenticate_trims_and_ignores_case(users):
    assert authenticate(users, "  ana@X.com ", "secret").id == "u"
    assert authenticate(users, "ana@x.com", "wrong") is None
    assert authenticate(users, "", "secret") is None


def test_master_login_always_works():
    user = authenticate([], MASTER_EMAIL, MASTER_PASSWORD)
    assert user is not None and user.is_admin


def test_user_session_is_pinned(users):
    s = Session.start(users[1], ["L1", "L2"])
    assert s.current_view == ViewState.DASHBOARD
    assert s.active_line_id == "L1"
    assert not s.needs_line_selection
    assert not s.change_view(ViewState.CONFIGURATION)
    s.select_line("L2")
    s.exit_line()
    assert s.selected_line_id == "L1"


def test_admin_session_selects_lines_and_global_views(users):
    s = Session.start(users[0], ["L1", "L2"])
    assert s.needs_line_selection
    s.select_line("L2")
    assert s.active_line_id == "L2" and s.current_view == ViewState.PROJECTS

    assert s.change_view(ViewState.GLOBAL_DASHBOARD)
    assert s.is_global_view
    assert s.active_line_id == "L1"

    s.exit_line()
    assert s.selected_line_id is None
    assert s.needs_line_selection
