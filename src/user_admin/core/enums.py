from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMINISTRATOR = "administrator"
    STANDARD = "standard"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES = {
    Role.ADMINISTRATOR: "Administrator",
    Role.STANDARD: "Standard",
}


class AuthFailureReason(str, Enum):
    """Why a login attempt was refused."""

    EMPTY_INPUT = "EMPTY_INPUT"
    NOT_FOUND = "NOT_FOUND"
    BLOCKED = "BLOCKED"
    BAD_CREDENTIAL = "BAD_CREDENTIAL"
