"""Example: drive the service layer directly (no console menu).

Shows the lockout flow: three wrong passwords block user1, admin unblocks.
"""

from user_admin.container import build_container
from user_admin.users.service import AuthFailure


def main():
    container = build_container(seed_default_users=True)
    auth = container.auth_service

    for _ in range(3):
        result = auth.login("user1", "wrongpass")
        if isinstance(result, AuthFailure):
            print(result.reason.value, "-", result.message)

    print(auth.account_status("user1"))

    admin = auth.login("admin", "admin123")
    user1 = container.user_service.find_by_username("user1")
    auth.unblock_user(user1.user_id, admin)

    print(container.history_service.render_user_history(admin))


if __name__ == "__main__":
    main()
