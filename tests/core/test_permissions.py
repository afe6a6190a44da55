import pytest

from user_admin.core.enums import Role
from user_admin.core.permissions import can_update_user, capabilities_for

CAPABILITY_NAMES = [
    "can_create_users",
    "can_delete_users",
    "can_update_other_users",
    "can_view_all_users",
    "can_view_all_history",
    "can_unblock_users",
    "can_change_roles",
]


@pytest.mark.parametrize("name", CAPABILITY_NAMES)
def test_administrator_has_every_capability(name):
    assert getattr(capabilities_for(Role.ADMINISTRATOR), name) is True


@pytest.mark.parametrize("name", CAPABILITY_NAMES)
def test_standard_has_no_capability(name):
    assert getattr(capabilities_for(Role.STANDARD), name) is False


@pytest.mark.parametrize("role", list(Role))
def test_self_update_is_always_allowed(role):
    assert can_update_user(role, "u-1", "u-1") is True


def test_updating_others_follows_role():
    assert can_update_user(Role.ADMINISTRATOR, "a", "b") is True
    assert can_update_user(Role.STANDARD, "a", "b") is False


def test_role_display_names():
    assert Role.ADMINISTRATOR.display_name == "Administrator"
    assert Role.STANDARD.display_name == "Standard"
