from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from .container import Container, build_container
from .storage.bootstrap import ensure_demo_fleet

logger = logging.getLogger("saferoute")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_core(settings=None) -> Container:
    """Build the data core once at process start-up.

    The returned container is handed to every consumer; nothing is kept in
    module globals.
    """

    settings = settings or load_settings()
    debug = bool(getattr(settings, "DEBUG", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "DEBUG" if debug else "INFO"))

    store_config = getattr(settings, "STORE_CONFIG")
    if debug:
        logger.debug(
            "settings=%s store=%s:%s",
            settings.__name__,
            store_config.get("backend"),
            store_config.get("path"),
        )

    return build_container(store_config=store_config, auth_config=getattr(settings, "AUTH_CONFIG"))


async def start(settings=None) -> Container:
    settings = settings or load_settings()
    container = create_core(settings)
    if bool(getattr(settings, "AUTO_SEED_STORE", False)):
        await ensure_demo_fleet(container.fleet_repo)
    return container
