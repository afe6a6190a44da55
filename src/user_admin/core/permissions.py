"""Role policy: fixed capability table per role."""
from __future__ import annotations

from dataclasses import dataclass

from .enums import Role


@dataclass(frozen=True)
class Capabilities:
    can_create_users: bool
    can_delete_users: bool
    can_update_other_users: bool
    can_view_all_users: bool
    can_view_all_history: bool
    can_unblock_users: bool
    can_change_roles: bool

    def can_update_user(self, actor_id: str, target_id: str) -> bool:
        """A user may always update itself; others need can_update_other_users."""
        if actor_id == target_id:
            return True
        return self.can_update_other_users


_ALL = Capabilities(
    can_create_users=True,
    can_delete_users=True,
    can_update_other_users=True,
    can_view_all_users=True,
    can_view_all_history=True,
    can_unblock_users=True,
    can_change_roles=True,
)

_NONE = Capabilities(
    can_create_users=False,
    can_delete_users=False,
    can_update_other_users=False,
    can_view_all_users=False,
    can_view_all_history=False,
    can_unblock_users=False,
    can_change_roles=False,
)

_POLICY = {
    Role.ADMINISTRATOR: _ALL,
    Role.STANDARD: _NONE,
}

_missing = [r for r in Role if r not in _POLICY]
if _missing:
    raise RuntimeError(f"Roles without capability entry: {_missing}")


def capabilities_for(role: Role) -> Capabilities:
    return _POLICY[role]


def can_update_user(role: Role, actor_id: str, target_id: str) -> bool:
    return _POLICY[role].can_update_user(actor_id, target_id)
