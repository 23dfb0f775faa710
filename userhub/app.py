# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import click
from flask import Flask, current_app

from userhub.infrastructure.container import Container
from userhub.shared.config import AppConfig, load_config
from userhub.shared.logging import logger, setup_logging
from userhub.shared.middleware.error_handler import configure_error_handling
from userhub.shared.middleware.request_logger import configure_request_logging
from userhub.shared.middleware.security_headers import configure_security_headers

EXTENSION_KEY = "userhub"


def get_container(app: Flask | None = None) -> Container:
    return (app or current_app).extensions[EXTENSION_KEY]


def _register_commands(app: Flask) -> None:
    @app.cli.command("purge-sessions")
    def purge_sessions() -> None:
        """Delete expired sessions from the session store."""
        removed = get_container().session_store.purge_expired()
        click.echo(f"Removed {removed} expired session(s)")


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, debug_mode=config.debug_logging)

    container = Container(config)
    container.database.init_schema()

    app = Flask(__name__, static_folder="public", static_url_path="/public")
    app.config.update(
        SECRET_KEY=config.secret_key,
        MAX_CONTENT_LENGTH=config.profile.max_request_bytes,
    )
    app.extensions[EXTENSION_KEY] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    container.session_binding.install(app)
    configure_security_headers(app, enable_hsts=config.security.enable_hsts)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.profile_controller.as_blueprint())

    _register_commands(app)

    logger.info(f"Flask app initialized env={config.app_env}")
    return app
