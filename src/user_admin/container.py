from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_MAX_USERS
from .history.service import ActionHistoryService
from .users.memory_user_repository import InMemoryUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: InMemoryUserRepository

    auth_service: AuthService
    user_service: UserService
    history_service: ActionHistoryService


def build_container(*, max_users: int = DEFAULT_MAX_USERS, seed_default_users: bool = False) -> Container:
    users_repo = InMemoryUserRepository(capacity=max_users)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    history_service = ActionHistoryService()

    if seed_default_users:
        user_service.create_default_users()

    return Container(
        users_repo=users_repo,
        auth_service=auth_service,
        user_service=user_service,
        history_service=history_service,
    )
