from __future__ import annotations

import pytest

from user_admin.core.enums import Role
from user_admin.history.service import ActionHistoryService
from user_admin.users.memory_user_repository import InMemoryUserRepository
from user_admin.users.model import User
from user_admin.users.service import AuthService, UserService


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository(capacity=10)


@pytest.fixture
def admin(repo) -> User:
    user = User("System Administrator", "admin", "admin123", Role.ADMINISTRATOR, user_id="admin")
    repo.add(user)
    return user


@pytest.fixture
def user1(repo) -> User:
    user = User("Standard User", "user1", "user123", Role.STANDARD, user_id="user1")
    repo.add(user)
    return user


@pytest.fixture
def auth(repo) -> AuthService:
    return AuthService(repo)


@pytest.fixture
def user_service(repo) -> UserService:
    return UserService(repo)


@pytest.fixture
def history_service() -> ActionHistoryService:
    return ActionHistoryService()
