from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .hourly_reports.controller import register as register_hourly_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    api_config = {
        "base_url": getattr(settings, "API_BASE_URL"),
        "timeout_seconds": getattr(settings, "API_TIMEOUT_SECONDS", 15),
    }
    logger.info("settings=%s backend=%s", settings_module, api_config["base_url"])

    if container is None:
        container = build_container(api_config=api_config, grace_minutes=int(getattr(settings, "GRACE_MINUTES", 30)))
    app.extensions["site_pulse"] = container

    register_users(app, container)
    register_hourly_reports(app, container)

    return app
