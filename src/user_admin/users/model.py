from __future__ import annotations

import logging
import threading
import uuid
from typing import Optional, Tuple, Union

from ..common.validators import require_min_length, require_non_empty, require_pattern
from ..core.constants import (
    MAX_ACTIONS_PER_USER,
    MAX_FAILED_LOGIN_ATTEMPTS,
    MIN_FULL_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
    USER_ID_PREFIX,
    USER_ID_SUFFIX_LENGTH,
    USERNAME_PATTERN,
)
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..core.permissions import Capabilities, capabilities_for
from ..history.buffer import BoundedHistory
from ..history.model import Action

logger = logging.getLogger(__name__)


def generate_user_id() -> str:
    return USER_ID_PREFIX + uuid.uuid4().hex[:USER_ID_SUFFIX_LENGTH].upper()


def validate_full_name(full_name: Optional[str]) -> str:
    full_name = require_non_empty(full_name, "Full name")
    if len(full_name) < MIN_FULL_NAME_LENGTH:
        raise ValidationError(
            f"Full name must be at least {MIN_FULL_NAME_LENGTH} characters", field="Full name"
        )
    return full_name


def validate_username(username: Optional[str]) -> str:
    username = require_non_empty(username, "Username")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters", field="Username"
        )
    return require_pattern(
        username,
        "Username",
        USERNAME_PATTERN,
        "Username may only contain letters, digits and underscores",
    )


def validate_password_format(password: Optional[str]) -> str:
    if not password:
        raise ValidationError("Password cannot be empty", field="Password")
    return require_min_length(password, "Password", MIN_PASSWORD_LENGTH)


def _validate_role(role: Optional[Role]) -> Role:
    if not isinstance(role, Role):
        raise ValidationError("Role is required", field="Role")
    return role


class User:
    """Domain entity: a user account with its own audit trail.

    Every mutator validates first and only then changes state, so a failed
    call leaves the user untouched. Each change appends one Action with the
    user's own id as actor.
    """

    def __init__(
        self,
        full_name: str,
        username: str,
        password: str,
        role: Role,
        *,
        user_id: Optional[str] = None,
        history_capacity: int = MAX_ACTIONS_PER_USER,
    ):
        if user_id is None:
            user_id = generate_user_id()
        user_id = require_non_empty(user_id, "User ID")
        full_name = validate_full_name(full_name)
        username = validate_username(username)
        password = validate_password_format(password)
        role = _validate_role(role)

        self._lock = threading.RLock()
        self._user_id = user_id
        self._full_name = full_name
        self._username = username
        self._password = password
        self._role = role
        self._is_blocked = False
        self._failed_login_attempts = 0
        self._history = BoundedHistory(history_capacity)

        self.add_action("User created in the system")

    # Read-only state
    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def username(self) -> str:
        return self._username

    @property
    def role(self) -> Role:
        return self._role

    @property
    def capabilities(self) -> Capabilities:
        return capabilities_for(self._role)

    @property
    def is_blocked(self) -> bool:
        return self._is_blocked

    @property
    def failed_login_attempts(self) -> int:
        return self._failed_login_attempts

    @property
    def is_administrator(self) -> bool:
        return self._role == Role.ADMINISTRATOR

    @property
    def is_standard_user(self) -> bool:
        return self._role == Role.STANDARD

    @property
    def status_label(self) -> str:
        return "BLOCKED" if self._is_blocked else "ACTIVE"

    # Mutators
    def set_full_name(self, full_name: str) -> None:
        full_name = validate_full_name(full_name)
        with self._lock:
            old_name = self._full_name
            self._full_name = full_name
            self.add_action(f"Name updated from '{old_name}' to '{full_name}'")

    def set_role(self, role: Role) -> None:
        role = _validate_role(role)
        with self._lock:
            old_role = self._role
            self._role = role
            self.add_action(f"Role changed from '{old_role.display_name}' to '{role.display_name}'")

    def set_blocked(self, blocked: bool) -> None:
        with self._lock:
            self._is_blocked = bool(blocked)
            self.add_action("User blocked" if blocked else "User unblocked")
            if not blocked:
                self._failed_login_attempts = 0
        if blocked:
            logger.info("user %s blocked", self._username)

    def set_password(self, password: str) -> None:
        password = validate_password_format(password)
        with self._lock:
            self._password = password
            self.add_action("Password updated")

    def validate_password(self, candidate: Optional[str]) -> bool:
        # Plain-text comparison; this system never hashes credentials.
        return candidate is not None and self._password == candidate

    def increment_failed_login_attempts(self) -> None:
        with self._lock:
            self._failed_login_attempts += 1
            self.add_action(f"Failed login attempt #{self._failed_login_attempts}")
            if self._failed_login_attempts >= MAX_FAILED_LOGIN_ATTEMPTS:
                self.set_blocked(True)

    def reset_failed_login_attempts(self) -> None:
        with self._lock:
            if self._failed_login_attempts > 0:
                self._failed_login_attempts = 0
                self.add_action("Failed login attempt counter reset")

    # History
    def add_action(self, action: Union[str, Action]) -> Action:
        if not isinstance(action, Action):
            action = Action(action, self._user_id)
        with self._lock:
            self._history.append(action)
        return action

    @property
    def action_history(self) -> Tuple[Action, ...]:
        """Snapshot of the history, oldest first."""
        with self._lock:
            return self._history.snapshot()

    @property
    def action_count(self) -> int:
        return len(self._history)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._user_id == other._user_id

    def __hash__(self) -> int:
        return hash(self._user_id)

    def __repr__(self) -> str:
        return (
            f"User(id={self._user_id!r}, full_name={self._full_name!r}, username={self._username!r}, "
            f"role={self._role.display_name}, blocked={self._is_blocked}, actions={self.action_count})"
        )
