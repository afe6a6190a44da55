from datetime import datetime

import pytest

from user_admin.core.exceptions import ValidationError
from user_admin.history.model import Action


def test_action_trims_fields_and_stamps_time():
    before = datetime.now()
    action = Action("  Logged in  ", "  USR_1 ")
    assert action.description == "Logged in"
    assert action.user_id == "USR_1"
    assert before <= action.timestamp <= datetime.now()


@pytest.mark.parametrize("description, user_id", [("", "u1"), ("   ", "u1"), ("ok", ""), ("ok", "  ")])
def test_action_rejects_blank_fields(description, user_id):
    with pytest.raises(ValidationError):
        Action(description, user_id)


def test_action_is_immutable():
    action = Action("x", "u1")
    with pytest.raises(AttributeError):
        action.description = "y"


def test_formatted_timestamp_and_str():
    action = Action("Logged in", "u1", timestamp=datetime(2025, 3, 7, 9, 5, 1))
    assert action.formatted_timestamp == "07/03/2025 09:05:01"
    assert str(action) == "[07/03/2025 09:05:01] Logged in (User: u1)"


def test_compare_by_timestamp():
    early = Action("a", "u1", timestamp=datetime(2025, 1, 1, 8, 0, 0))
    late = Action("b", "u1", timestamp=datetime(2025, 1, 1, 9, 0, 0))
    assert early.compare_by_timestamp(late) == -1
    assert late.compare_by_timestamp(early) == 1
    assert early.compare_by_timestamp(early) == 0
