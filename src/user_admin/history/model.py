from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common import datetime_utils
from ..common.validators import require_non_empty


@dataclass(frozen=True)
class Action:
    """Immutable audit entry: what happened, who did it, and when."""

    description: str
    user_id: str
    timestamp: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "description", require_non_empty(self.description, "Action description"))
        object.__setattr__(self, "user_id", require_non_empty(self.user_id, "User ID"))
        if self.timestamp is None:
            object.__setattr__(self, "timestamp", datetime_utils.now_local())

    @property
    def formatted_timestamp(self) -> str:
        return datetime_utils.format_timestamp(self.timestamp)

    def compare_by_timestamp(self, other: "Action") -> int:
        if self.timestamp < other.timestamp:
            return -1
        if self.timestamp > other.timestamp:
            return 1
        return 0

    def __str__(self) -> str:
        return f"[{self.formatted_timestamp}] {self.description} (User: {self.user_id})"
