from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from .config import get_settings_module
from .container import Container, build_container
from .controller import ConsoleController

logger = logging.getLogger(__name__)


def create_app() -> ConsoleController:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container: Container = build_container(
        max_users=int(getattr(settings, "MAX_USERS", 50)),
        seed_default_users=bool(getattr(settings, "SEED_DEFAULT_USERS", False)),
    )
    if debug:
        logger.debug("settings=%s users=%d", settings_module, container.users_repo.count())

    return ConsoleController(container)


def main() -> None:
    create_app().run()


if __name__ == "__main__":
    main()
