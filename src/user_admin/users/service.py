from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ..core.enums import AuthFailureReason, Role
from ..core.exceptions import (
    AuthorizationError,
    DuplicateUserError,
    UserNotFoundError,
    ValidationError,
)
from .model import User, validate_full_name, validate_password_format
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthFailure:
    """Expected login refusal; never raised, returned to the caller."""

    reason: AuthFailureReason
    message: str
    blocked_now: bool = False


_FAILURE_MESSAGES = {
    AuthFailureReason.EMPTY_INPUT: "Username and password cannot be empty",
    AuthFailureReason.NOT_FOUND: "User not found",
    AuthFailureReason.BLOCKED: "The account is blocked. Contact an administrator",
    AuthFailureReason.BAD_CREDENTIAL: "Wrong password",
}


def _failure(reason: AuthFailureReason, *, blocked_now: bool = False) -> AuthFailure:
    message = _FAILURE_MESSAGES[reason]
    if blocked_now:
        message += ". The account has been blocked after too many failed attempts"
    return AuthFailure(reason=reason, message=message, blocked_now=blocked_now)


class AuthService:
    """Use cases: login, logout, password change, unblock and role change."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, username: Optional[str], password: Optional[str]) -> Union[User, AuthFailure]:
        if not username or not username.strip() or not password:
            return _failure(AuthFailureReason.EMPTY_INPUT)

        user = self._users.get_by_username(username.strip())
        if user is None:
            # No account to attach an audit entry to.
            logger.warning("login failed for unknown username %r", username.strip())
            return _failure(AuthFailureReason.NOT_FOUND)

        if user.is_blocked:
            user.add_action("Failed login attempt: account is blocked")
            logger.warning("login refused for blocked user %s", user.username)
            return _failure(AuthFailureReason.BLOCKED)

        if not user.validate_password(password):
            user.increment_failed_login_attempts()
            user.add_action("Failed login attempt: wrong password")
            logger.info(
                "wrong password for %s (attempt %d)", user.username, user.failed_login_attempts
            )
            return _failure(AuthFailureReason.BAD_CREDENTIAL, blocked_now=user.is_blocked)

        user.reset_failed_login_attempts()
        user.add_action("Successful login")
        logger.info("user %s logged in", user.username)
        return user

    def logout(self, user: Optional[User]) -> None:
        if user is None:
            return
        user.add_action("Logged out")
        logger.info("user %s logged out", user.username)

    def change_password(self, user: Optional[User], current_password: str, new_password: str) -> bool:
        if user is None:
            return False

        if not user.validate_password(current_password):
            user.add_action("Failed password change attempt")
            return False

        if current_password == new_password:
            return False

        try:
            user.set_password(new_password)
        except ValidationError as e:
            logger.info("password change rejected for %s: %s", user.username, e)
            return False
        return True

    def unblock_user(self, target_user_id: str, admin_user: Optional[User]) -> bool:
        if admin_user is None or not admin_user.capabilities.can_unblock_users:
            logger.warning("unblock denied for %s", admin_user.username if admin_user else None)
            return False

        target = self._users.get_by_id(target_user_id)
        if target is None:
            return False

        if not target.is_blocked:
            return True

        target.set_blocked(False)
        admin_user.add_action(f"Unblocked user: {target.username}")
        logger.info("%s unblocked %s", admin_user.username, target.username)
        return True

    def change_user_role(self, target_user_id: str, new_role: Role, admin_user: Optional[User]) -> bool:
        if admin_user is None or not admin_user.capabilities.can_change_roles:
            logger.warning("role change denied for %s", admin_user.username if admin_user else None)
            return False

        target = self._users.get_by_id(target_user_id)
        if target is None:
            return False

        if admin_user.user_id == target.user_id:
            return False

        if target.role == new_role:
            return True

        old_role = target.role
        target.set_role(new_role)
        admin_user.add_action(
            f"Changed role of {target.username} from '{old_role.display_name}' to '{new_role.display_name}'"
        )
        logger.info("%s changed role of %s to %s", admin_user.username, target.username, new_role.value)
        return True

    def account_status(self, username: str) -> str:
        user = self._users.get_by_username(username)
        if user is None:
            return "User not found"

        return (
            f"Account status for '{username}':\n"
            f"- Blocked: {'Yes' if user.is_blocked else 'No'}\n"
            f"- Failed attempts: {user.failed_login_attempts}\n"
            f"- Role: {user.role.display_name}\n"
        )


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(
        self,
        *,
        full_name: str,
        username: str,
        password: str,
        role: Role,
        current_user: Optional[User],
    ) -> User:
        if current_user is None or not current_user.capabilities.can_create_users:
            raise AuthorizationError("You do not have permission to create users")

        if username and not self._users.is_username_unique(username.strip()):
            raise DuplicateUserError(f"Username '{username.strip()}' is already in use")

        user = User(full_name, username, password, role)
        if not self._users.is_user_id_unique(user.user_id):
            raise DuplicateUserError("User ID collision, please try again")

        self._users.add(user)
        current_user.add_action(f"Created user: {user.username} ({user.full_name})")
        logger.info("%s created user %s (%s)", current_user.username, user.username, user.user_id)
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self._users.get_by_username(username)

    def update_user(
        self,
        user_id: str,
        *,
        current_user: Optional[User],
        new_full_name: Optional[str] = None,
        new_password: Optional[str] = None,
        current_password: Optional[str] = None,
    ) -> bool:
        """Update name and/or password; returns False when nothing changed."""
        target = self._users.get_by_id(user_id)
        if target is None:
            raise UserNotFoundError("User not found")

        if current_user is None or not current_user.capabilities.can_update_user(
            current_user.user_id, target.user_id
        ):
            raise AuthorizationError("You do not have permission to update this user")

        change_name = bool(new_full_name and new_full_name.strip())
        change_password = bool(new_password)

        if change_password and (current_password is None or not target.validate_password(current_password)):
            raise ValidationError("The current password is incorrect", field="Password")

        # Both values are validated before anything is written.
        if change_name:
            validate_full_name(new_full_name)
        if change_password:
            validate_password_format(new_password)

        if change_name:
            target.set_full_name(new_full_name)
        if change_password:
            target.set_password(new_password)

        if not (change_name or change_password):
            return False

        if current_user.user_id != target.user_id:
            current_user.add_action(f"Updated information of user: {target.username}")
        return True

    def update_own_profile(self, current_user: User, new_full_name: str) -> bool:
        if not new_full_name or not new_full_name.strip():
            return False
        current_user.set_full_name(new_full_name)
        return True

    def delete_user(self, user_id: str, *, current_user: Optional[User]) -> User:
        target = self._users.get_by_id(user_id)
        if target is None:
            raise UserNotFoundError("User not found")

        if current_user is None or not current_user.capabilities.can_delete_users:
            raise AuthorizationError("You do not have permission to delete users")

        if current_user.user_id == target.user_id:
            raise ValidationError("You cannot delete yourself")

        if not self._users.delete_by_id(target.user_id):
            raise UserNotFoundError("User not found")

        current_user.add_action(f"Deleted user: {target.username} ({target.full_name})")
        logger.info("%s deleted user %s", current_user.username, target.username)
        return target

    def list_users(self, current_user: Optional[User]) -> List[User]:
        if current_user is None:
            return []
        if current_user.capabilities.can_view_all_users:
            return list(self._users.list_all())
        return [current_user]

    def count(self) -> int:
        return self._users.count()

    def create_default_users(self) -> None:
        """Seed the demo administrator and standard user."""
        defaults = (
            User("System Administrator", "admin", "admin123", Role.ADMINISTRATOR, user_id="admin"),
            User("Standard User", "user1", "user123", Role.STANDARD, user_id="user1"),
        )
        for user in defaults:
            if self._users.is_user_id_unique(user.user_id) and self._users.is_username_unique(user.username):
                self._users.add(user)
