from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .container import Container
from .core.enums import Role
from .core.exceptions import DomainError
from .users.model import User
from .users.service import AuthFailure

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


@dataclass
class Session:
    """Who is logged in to this console, if anyone."""

    current_user: Optional[User] = None
    running: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None


class ConsoleController:
    """Text menu on top of the services. Holds no business rules itself."""

    def __init__(
        self,
        container: Container,
        *,
        input_func: InputFunc = input,
        output_func: OutputFunc = print,
        session: Optional[Session] = None,
    ):
        self._c = container
        self._input = input_func
        self._out = output_func
        self.session = session or Session()

        self._user_options: Dict[str, Callable[[], None]] = {
            "1": self.handle_view_profile,
            "2": self.handle_update_profile,
            "3": self.handle_change_password,
            "4": self.handle_view_history,
            "5": self.handle_search_history,
            "6": self.handle_export_history,
            "0": self.handle_logout,
        }
        self._admin_options: Dict[str, Callable[[], None]] = {
            "7": self.handle_create_user,
            "8": self.handle_view_all_users,
            "9": self.handle_update_other_user,
            "10": self.handle_delete_user,
            "11": self.handle_view_global_history,
            "12": self.handle_unblock_user,
            "13": self.handle_change_user_role,
            "14": self.show_system_status,
        }

    # Loop
    def run(self) -> None:
        self._out("Welcome to the User Management System")
        while self.session.running:
            try:
                if self.session.is_authenticated:
                    self.show_user_menu()
                else:
                    self.show_main_menu()
            except EOFError:
                self.session.running = False
            except Exception:
                logger.exception("unexpected error in console loop")
                self._out("Unexpected error. The system will keep running...")
        self._out("Thank you for using the User Management System!")

    def _ask(self, prompt: str) -> str:
        return self._input(prompt)

    def show_main_menu(self) -> None:
        self._out("=" * 50)
        self._out("       USER MANAGEMENT SYSTEM")
        self._out("=" * 50)
        self._out("1. Log in")
        self._out("2. System status")
        self._out("3. Exit")
        option = self._ask("Select an option: ").strip()

        if option == "1":
            self.handle_login()
        elif option == "2":
            self.show_system_status()
        elif option == "3":
            self.session.running = False
        else:
            self._out("Invalid option. Please choose 1, 2 or 3.")

    def show_user_menu(self) -> None:
        user = self.session.current_user
        self._out("=" * 60)
        self._out(f"       WELCOME, {user.full_name.upper()}")
        self._out(f"       Role: {user.role.display_name}")
        self._out("=" * 60)
        self._out("1. View my profile")
        self._out("2. Update my profile")
        self._out("3. Change my password")
        self._out("4. View my action history")
        self._out("5. Search my history")
        self._out("6. Export my history")
        if user.is_administrator:
            self._out("--- ADMINISTRATOR OPTIONS ---")
            self._out("7. Create user")
            self._out("8. View all users")
            self._out("9. Update another user")
            self._out("10. Delete user")
            self._out("11. View global history")
            self._out("12. Unblock user")
            self._out("13. Change user role")
            self._out("14. System status")
        self._out("0. Log out")
        option = self._ask("Select an option: ").strip()

        handler = self._user_options.get(option)
        if handler is None and user.is_administrator:
            handler = self._admin_options.get(option)
        if handler is None:
            self._out("Invalid option.")
            return

        try:
            handler()
        except DomainError as e:
            self._out(f"Error: {e}")

    # Anonymous
    def handle_login(self) -> None:
        username = self._ask("Username: ").strip()
        password = self._ask("Password: ")

        result = self._c.auth_service.login(username, password)
        if isinstance(result, AuthFailure):
            self._out(f"Error: {result.message}.")
            return

        self.session.current_user = result
        self._out(f"Welcome, {result.full_name}!")
        self._out(f"Role: {result.role.display_name}")

    def show_system_status(self) -> None:
        repo = self._c.users_repo
        users = repo.list_all()
        blocked = sum(1 for u in users if u.is_blocked)
        self._out("--- SYSTEM STATUS ---")
        self._out(f"Registered users: {repo.count()}/{repo.capacity}")
        self._out(f"Blocked users: {blocked}")
        self._out(f"Session active: {'Yes' if self.session.is_authenticated else 'No'}")

    # Any logged-in user
    def handle_view_profile(self) -> None:
        user = self.session.current_user
        self._out("--- MY PROFILE ---")
        self._out(f"User ID: {user.user_id}")
        self._out(f"Full name: {user.full_name}")
        self._out(f"Username: {user.username}")
        self._out(f"Role: {user.role.display_name}")
        self._out(f"Status: {user.status_label}")
        self._out(f"Total actions: {user.action_count}")
        self._c.history_service.register_action(user, "Viewed their profile")

    def handle_update_profile(self) -> None:
        user = self.session.current_user
        self._out(f"Current name: {user.full_name}")
        new_name = self._ask("New full name (Enter to keep current): ").strip()
        if self._c.user_service.update_own_profile(user, new_name):
            self._out("Profile updated successfully.")
        else:
            self._out("No changes were made.")

    def handle_change_password(self) -> None:
        current = self._ask("Current password: ")
        new = self._ask("New password: ")
        confirm = self._ask("Confirm new password: ")
        if new != confirm:
            self._out("Error: passwords do not match.")
            return
        if self._c.auth_service.change_password(self.session.current_user, current, new):
            self._out("Password changed successfully.")
        else:
            self._out("The password could not be changed.")

    def handle_view_history(self) -> None:
        user = self.session.current_user
        self._out(self._c.history_service.render_user_history(user))
        self._c.history_service.register_action(user, "Viewed their action history")

    def handle_search_history(self) -> None:
        user = self.session.current_user
        keyword = self._ask("Keyword to search for: ").strip()
        if not keyword:
            self._out("No keyword entered.")
            return
        self._out(self._c.history_service.render_filtered_history(user, keyword))
        self._c.history_service.register_action(user, f"Searched their history: '{keyword}'")

    def handle_export_history(self) -> None:
        self._out("Exported history:")
        self._out("-" * 80)
        self._out(self._c.history_service.export_user_history(self.session.current_user))
        self._out("-" * 80)

    def handle_logout(self) -> None:
        user = self.session.current_user
        self._c.auth_service.logout(user)
        self._out(f"Session closed. Goodbye, {user.full_name}!")
        self.session.current_user = None

    # Administrator
    def handle_create_user(self) -> None:
        full_name = self._ask("Full name: ").strip()
        username = self._ask("Username: ").strip()
        password = self._ask("Password: ")
        self._out("Select the role:")
        self._out("1. Standard")
        self._out("2. Administrator")
        role = Role.ADMINISTRATOR if self._ask("Option: ").strip() == "2" else Role.STANDARD

        user = self._c.user_service.create_user(
            full_name=full_name,
            username=username,
            password=password,
            role=role,
            current_user=self.session.current_user,
        )
        self._out(f"User '{user.username}' created with ID: {user.user_id}")

    def handle_view_all_users(self) -> None:
        current = self.session.current_user
        users = self._c.user_service.list_users(current)
        if not users:
            self._out("There are no users in the system.")
        else:
            self._out(f"Total users: {len(users)}")
            self._out("-" * 100)
            for i, u in enumerate(users, start=1):
                self._out(
                    f"{i}. {u.user_id:<15} | {u.full_name:<20} | {u.username:<15} | "
                    f"{u.role.display_name:<13} | {u.status_label:<8} | {u.action_count} actions"
                )
        self._c.history_service.register_action(current, "Viewed the list of all users")

    def handle_update_other_user(self) -> None:
        user_id = self._ask("ID of the user to update: ").strip()
        target = self._c.user_service.find_by_id(user_id)
        if target is None:
            self._out("User not found.")
            return

        self._out(f"User found: {target.full_name} ({target.username})")
        new_name = self._ask("New full name (Enter to keep): ").strip() or None
        new_password = self._ask("New password (Enter to keep): ") or None
        current_password = None
        if new_password:
            current_password = self._ask("Current password of the user: ")

        updated = self._c.user_service.update_user(
            user_id,
            current_user=self.session.current_user,
            new_full_name=new_name,
            new_password=new_password,
            current_password=current_password,
        )
        self._out("User updated successfully." if updated else "No changes were made.")

    def handle_delete_user(self) -> None:
        user_id = self._ask("ID of the user to delete: ").strip()
        confirm = self._ask(f"Delete user '{user_id}'? (y/N): ").strip().lower()
        if confirm not in {"y", "yes"}:
            self._out("Operation cancelled.")
            return
        deleted = self._c.user_service.delete_user(user_id, current_user=self.session.current_user)
        self._out(f"User '{deleted.username}' deleted successfully.")

    def handle_view_global_history(self) -> None:
        current = self.session.current_user
        text = self._c.history_service.render_global_history(current, self._c.user_service.list_users(current))
        if text is None:
            self._out("Error: you do not have permission to view the history of all users.")
            return
        self._out(text)

    def handle_unblock_user(self) -> None:
        user_id = self._ask("ID of the user to unblock: ").strip()
        if self._c.auth_service.unblock_user(user_id, self.session.current_user):
            self._out("Operation completed.")
        else:
            self._out("The user could not be unblocked.")

    def handle_change_user_role(self) -> None:
        user_id = self._ask("ID of the user: ").strip()
        self._out("Select the new role:")
        self._out("1. Standard")
        self._out("2. Administrator")
        option = self._ask("Option: ").strip()
        if option not in {"1", "2"}:
            self._out("Invalid role option.")
            return
        new_role = Role.ADMINISTRATOR if option == "2" else Role.STANDARD
        if self._c.auth_service.change_user_role(user_id, new_role, self.session.current_user):
            self._out("Role updated.")
        else:
            self._out("The role could not be changed.")
