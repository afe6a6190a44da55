import pytest

from user_admin.core.enums import Role
from user_admin.core.exceptions import (
    AuthorizationError,
    CapacityExceededError,
    DuplicateUserError,
    UserNotFoundError,
    ValidationError,
)
from user_admin.users.memory_user_repository import InMemoryUserRepository
from user_admin.users.service import UserService


def test_admin_creates_user(user_service, repo, admin):
    user = user_service.create_user(
        full_name="New Person", username="newbie", password="pass1", role=Role.STANDARD, current_user=admin
    )
    assert repo.get_by_username("newbie") is user
    assert user.user_id.startswith("USR_")
    assert admin.action_history[-1].description == "Created user: newbie (New Person)"


def test_standard_cannot_create(user_service, user1):
    with pytest.raises(AuthorizationError):
        user_service.create_user(
            full_name="New Person", username="newbie", password="pass1", role=Role.STANDARD, current_user=user1
        )


def test_create_duplicate_username(user_service, admin, user1):
    with pytest.raises(DuplicateUserError):
        user_service.create_user(
            full_name="Other", username="user1", password="pass1", role=Role.STANDARD, current_user=admin
        )


def test_create_invalid_fields(user_service, repo, admin):
    with pytest.raises(ValidationError):
        user_service.create_user(
            full_name="Ok Name", username="x!", password="pass1", role=Role.STANDARD, current_user=admin
        )
    assert repo.count() == 1


def test_create_respects_capacity(admin):
    repo = InMemoryUserRepository(capacity=1)
    repo.add(admin)
    service = UserService(repo)
    with pytest.raises(CapacityExceededError):
        service.create_user(
            full_name="Ok Name", username="extra", password="pass1", role=Role.STANDARD, current_user=admin
        )


def test_admin_updates_other_user(user_service, admin, user1):
    assert user_service.update_user(user1.user_id, current_user=admin, new_full_name="Renamed User") is True
    assert user1.full_name == "Renamed User"
    assert admin.action_history[-1].description == "Updated information of user: user1"


def test_self_update_does_not_log_on_actor_twice(user_service, user1):
    assert user_service.update_user(
        user1.user_id, current_user=user1, new_password="brandnew", current_password="user123"
    )
    assert user1.validate_password("brandnew")
    assert user1.action_history[-1].description == "Password updated"


def test_standard_cannot_update_others(user_service, admin, user1):
    with pytest.raises(AuthorizationError):
        user_service.update_user(admin.user_id, current_user=user1, new_full_name="Hacked")


def test_update_password_needs_current(user_service, admin, user1):
    with pytest.raises(ValidationError):
        user_service.update_user(user1.user_id, current_user=admin, new_password="brandnew", current_password="bad")
    assert user1.validate_password("user123")


def test_update_is_all_or_nothing(user_service, user1):
    with pytest.raises(ValidationError):
        user_service.update_user(
            user1.user_id,
            current_user=user1,
            new_full_name="Valid Name",
            new_password="abc",
            current_password="user123",
        )
    assert user1.full_name == "Standard User"


def test_update_without_changes(user_service, admin, user1):
    assert user_service.update_user(user1.user_id, current_user=admin, new_full_name="  ") is False


def test_update_unknown_user(user_service, admin):
    with pytest.raises(UserNotFoundError):
        user_service.update_user("nobody", current_user=admin, new_full_name="Name")


def test_update_own_profile(user_service, user1):
    assert user_service.update_own_profile(user1, "") is False
    assert user_service.update_own_profile(user1, "Fresh Name") is True
    assert user1.full_name == "Fresh Name"


def test_delete_user(user_service, repo, admin, user1):
    deleted = user_service.delete_user(user1.user_id, current_user=admin)
    assert deleted is user1
    assert repo.get_by_id(user1.user_id) is None
    assert admin.action_history[-1].description == "Deleted user: user1 (Standard User)"


def test_delete_rules(user_service, admin, user1):
    with pytest.raises(AuthorizationError):
        user_service.delete_user(admin.user_id, current_user=user1)
    with pytest.raises(ValidationError):
        user_service.delete_user(admin.user_id, current_user=admin)
    with pytest.raises(UserNotFoundError):
        user_service.delete_user("nobody", current_user=admin)


def test_list_users_by_role(user_service, admin, user1):
    assert user_service.list_users(admin) == [admin, user1]
    assert user_service.list_users(user1) == [user1]
    assert user_service.list_users(None) == []


def test_create_default_users_is_idempotent(repo):
    service = UserService(repo)
    service.create_default_users()
    service.create_default_users()

    assert service.count() == 2
    assert repo.get_by_username("admin").role == Role.ADMINISTRATOR
    assert repo.get_by_id("user1").validate_password("user123")
