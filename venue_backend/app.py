# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from venue_backend.domain.users.repositories import PasswordHasher
from venue_backend.infrastructure.container import Container
from venue_backend.infrastructure.seed import seed_venues
from venue_backend.shared.config import AppConfig, load_config
from venue_backend.shared.logging import logger, setup_logging
from venue_backend.shared.middleware.error_handler import configure_error_handling
from venue_backend.shared.middleware.request_logger import configure_request_logging


def bootstrap(container: Container) -> int:
    """Run the startup steps that are not part of request handling."""

    config = container.config
    if not config.seed.on_startup:
        logger.info("bootstrap: seeding disabled")
        return 0
    return seed_venues(container.venue_repository, config.seed.file)


def create_app(
    config: AppConfig | None = None,
    *,
    password_hasher: PasswordHasher | None = None,
    configure_logging: bool = True,
) -> Flask:
    config = config or load_config()
    if configure_logging:
        setup_logging(debug_mode=config.debug_logging)

    container = Container(config, password_hasher=password_hasher)
    bootstrap(container)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key, APP_CONFIG=config)
    app.extensions["venue_backend"] = container

    if config.security.trusted_proxies:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=config.security.trusted_proxies)

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(app, resources={r"/api/*": {"origins": config.security.allowed_origins}})

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.venues_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        return resp

    logger.info(
        f"Flask app initialized (storage={config.storage_backend}, "
        f"require_auth_for_mutations={config.auth.require_auth_for_mutations})"
    )
    return app
