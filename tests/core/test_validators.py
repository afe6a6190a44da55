import pytest

from user_admin.common.validators import require_min_length, require_non_empty, require_pattern
from user_admin.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  bob ", "Name") == "bob"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_require_non_empty_rejects_blank(value):
    with pytest.raises(ValidationError) as exc:
        require_non_empty(value, "Name")
    assert exc.value.field == "Name"


def test_require_min_length():
    assert require_min_length("abcd", "Password", 4) == "abcd"
    with pytest.raises(ValidationError):
        require_min_length("abc", "Password", 4)


def test_require_pattern():
    assert require_pattern("ok_1", "Username", r"^[a-z0-9_]+$", "bad") == "ok_1"
    with pytest.raises(ValidationError, match="bad"):
        require_pattern("no-dash", "Username", r"^[a-z0-9_]+$", "bad")
