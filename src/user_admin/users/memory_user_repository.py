from __future__ import annotations

import threading
from typing import Dict, List, Optional

from ..core.constants import DEFAULT_MAX_USERS
from ..core.exceptions import CapacityExceededError, DuplicateUserError
from .model import User


class InMemoryUserRepository:
    """Process-local user directory keyed by id and by username.

    Insertion order is kept for listing. Nothing survives a restart.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_USERS):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._lock = threading.Lock()
        self._by_id: Dict[str, User] = {}
        self._by_username: Dict[str, User] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def get_by_id(self, user_id: str) -> Optional[User]:
        if not user_id or not user_id.strip():
            return None
        with self._lock:
            return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        if not username or not username.strip():
            return None
        with self._lock:
            return self._by_username.get(username)

    def add(self, user: User) -> None:
        with self._lock:
            if len(self._by_id) >= self._capacity:
                raise CapacityExceededError(self._capacity)
            if user.username in self._by_username:
                raise DuplicateUserError(f"Username '{user.username}' is already in use")
            if user.user_id in self._by_id:
                raise DuplicateUserError(f"User ID '{user.user_id}' is already in use")
            self._by_id[user.user_id] = user
            self._by_username[user.username] = user

    def delete_by_id(self, user_id: str) -> bool:
        with self._lock:
            user = self._by_id.pop(user_id, None)
            if user is None:
                return False
            del self._by_username[user.username]
            return True

    def list_all(self) -> List[User]:
        with self._lock:
            return list(self._by_id.values())

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)

    def is_username_unique(self, username: str) -> bool:
        return self.get_by_username(username) is None

    def is_user_id_unique(self, user_id: str) -> bool:
        return self.get_by_id(user_id) is None
