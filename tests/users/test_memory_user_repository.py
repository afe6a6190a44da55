import pytest

from user_admin.core.enums import Role
from user_admin.core.exceptions import CapacityExceededError, DuplicateUserError
from user_admin.users.memory_user_repository import InMemoryUserRepository
from user_admin.users.model import User


def _user(username: str, user_id=None) -> User:
    return User("Some Name", username, "pass1", Role.STANDARD, user_id=user_id)


def test_add_and_lookup():
    repo = InMemoryUserRepository()
    user = _user("alice", "a1")
    repo.add(user)

    assert repo.get_by_id("a1") is user
    assert repo.get_by_username("alice") is user
    assert repo.get_by_username("  ") is None
    assert repo.count() == 1
    assert not repo.is_username_unique("alice")
    assert repo.is_user_id_unique("zz")


def test_duplicates_are_rejected():
    repo = InMemoryUserRepository()
    repo.add(_user("alice", "a1"))
    with pytest.raises(DuplicateUserError):
        repo.add(_user("alice", "a2"))
    with pytest.raises(DuplicateUserError):
        repo.add(_user("bob", "a1"))
    assert repo.count() == 1


def test_capacity_is_enforced():
    repo = InMemoryUserRepository(capacity=2)
    repo.add(_user("alice"))
    repo.add(_user("bob"))
    with pytest.raises(CapacityExceededError) as exc:
        repo.add(_user("carol"))
    assert exc.value.capacity == 2


def test_delete_keeps_order_of_remaining():
    repo = InMemoryUserRepository()
    for name in ("alice", "bob", "carol"):
        repo.add(_user(name, name))

    assert repo.delete_by_id("bob") is True
    assert repo.delete_by_id("bob") is False
    assert [u.username for u in repo.list_all()] == ["alice", "carol"]
    assert repo.get_by_username("bob") is None
