from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..common import datetime_utils
from ..core.constants import RECENT_ACTIONS_IN_SUMMARY
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.model import User
from .model import Action

logger = logging.getLogger(__name__)

_WIDE = "=" * 80
_NARROW = "-" * 80


@dataclass(frozen=True)
class GlobalStatistics:
    total_users: int
    active_users: int
    blocked_users: int
    administrators: int
    standard_users: int
    total_actions: int

    @property
    def average_actions_per_user(self) -> float:
        if self.total_users == 0:
            return 0.0
        return self.total_actions / self.total_users


def compute_statistics(users: Sequence[User]) -> GlobalStatistics:
    blocked = sum(1 for u in users if u.is_blocked)
    return GlobalStatistics(
        total_users=len(users),
        active_users=len(users) - blocked,
        blocked_users=blocked,
        administrators=sum(1 for u in users if u.role == Role.ADMINISTRATOR),
        standard_users=sum(1 for u in users if u.role == Role.STANDARD),
        total_actions=sum(u.action_count for u in users),
    )


class ActionHistoryService:
    """Use cases around a user's audit trail: record, query, render, export."""

    def register_action(self, user: Optional[User], description: str) -> bool:
        if user is None:
            logger.warning("cannot register action %r without a user", description)
            return False
        try:
            user.add_action(description)
        except ValidationError as e:
            logger.warning("action not registered for %s: %s", user.username, e)
            return False
        return True

    def get_user_history(self, user: Optional[User]) -> Tuple[Action, ...]:
        if user is None:
            return ()
        return user.action_history

    def search_actions(self, user: Optional[User], keyword: Optional[str]) -> List[Action]:
        """Case-insensitive substring search over action descriptions."""
        if user is None or not keyword or not keyword.strip():
            return []
        needle = keyword.strip().lower()
        return [a for a in user.action_history if needle in a.description.lower()]

    def render_user_history(self, user: User) -> str:
        history = user.action_history
        lines = [
            _WIDE,
            f"ACTION HISTORY - {user.full_name} ({user.username})",
            _WIDE,
        ]
        if not history:
            lines.append("No actions recorded for this user.")
        else:
            lines.append(f"Total actions: {len(history)}")
            lines.append(_NARROW)
            # Newest first.
            for i, action in enumerate(reversed(history), start=1):
                lines.append(f"{i}. {action}")
        lines.append(_WIDE)
        return "\n".join(lines)

    def render_filtered_history(self, user: User, keyword: str) -> str:
        found = self.search_actions(user, keyword)
        lines = [
            _WIDE,
            f"FILTERED HISTORY - {user.full_name} (Filter: '{keyword}')",
            _WIDE,
        ]
        if not found:
            lines.append(f"No actions found containing '{keyword}'.")
        else:
            lines.append(f"Actions found: {len(found)}")
            lines.append(_NARROW)
            for i, action in enumerate(found, start=1):
                lines.append(f"{i}. {action}")
        lines.append(_WIDE)
        return "\n".join(lines)

    def export_user_history(self, user: Optional[User]) -> str:
        if user is None:
            return "Error: invalid user for export."

        history = user.action_history
        self.register_action(user, "Exported their action history")

        sep = "=" * 37
        lines = [
            "ACTION HISTORY EXPORT",
            sep,
            f"User: {user.full_name}",
            f"Username: {user.username}",
            f"ID: {user.user_id}",
            f"Role: {user.role.display_name}",
            f"Export date: {datetime_utils.format_timestamp(datetime_utils.now_local())}",
            f"Total actions: {len(history)}",
            sep,
            "",
        ]
        if history:
            lines.extend(f"{i}. {action}" for i, action in enumerate(history, start=1))
        else:
            lines.append("No actions recorded.")
        lines.extend(["", sep, "End of export"])
        return "\n".join(lines) + "\n"

    def global_summary(self, current_user: Optional[User], users: Sequence[User]) -> Optional[GlobalStatistics]:
        """Statistics over all users; None when the caller may not view all history."""
        if current_user is None or not current_user.capabilities.can_view_all_history:
            return None
        if users:
            self.register_action(current_user, "Viewed global history of all users")
        return compute_statistics(users)

    def render_global_history(self, current_user: Optional[User], users: Sequence[User]) -> Optional[str]:
        stats = self.global_summary(current_user, users)
        if stats is None:
            return None

        wide = "=" * 100
        lines = [wide, "GLOBAL ACTION HISTORY - ADMINISTRATOR VIEW", wide]
        if not users:
            lines.append("There are no users in the system.")
        else:
            for user in users:
                lines.extend(self._user_summary(user))
                lines.append("-" * 50)
            lines.extend(self._statistics_lines(stats))
        lines.append(wide)
        return "\n".join(lines)

    @staticmethod
    def _user_summary(user: User) -> List[str]:
        history = user.action_history
        lines = [
            "",
            f"User: {user.full_name} ({user.username})",
            f"Role: {user.role.display_name} | Status: {user.status_label}",
            f"Total actions: {len(history)}",
        ]
        if history:
            lines.append("Latest actions:")
            for action in reversed(history[-RECENT_ACTIONS_IN_SUMMARY:]):
                lines.append(f"  * {action.formatted_timestamp}: {action.description}")
        else:
            lines.append("No actions recorded.")
        return lines

    @staticmethod
    def _statistics_lines(stats: GlobalStatistics) -> List[str]:
        lines = [
            "",
            "GLOBAL STATISTICS:",
            "-" * 30,
            f"* Total users: {stats.total_users}",
            f"* Active users: {stats.active_users}",
            f"* Blocked users: {stats.blocked_users}",
            f"* Administrators: {stats.administrators}",
            f"* Standard users: {stats.standard_users}",
            f"* Total actions recorded: {stats.total_actions}",
        ]
        if stats.total_users > 0:
            lines.append(f"* Average actions per user: {stats.average_actions_per_user:.2f}")
        return lines
