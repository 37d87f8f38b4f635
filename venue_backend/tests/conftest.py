from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from flask import Flask

from venue_backend.app import create_app
from venue_backend.domain.users.repositories import PasswordHasher
from venue_backend.shared.config.settings import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    SecurityConfig,
    SeedConfig,
)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def build_config(
    *,
    storage: str = "memory",
    require_auth: bool = False,
    seed: bool = False,
    rate_limit: bool = False,
    **overrides: Any,
) -> AppConfig:
    return AppConfig(
        SECRET_KEY=overrides.pop("secret_key", "test-secret"),
        STORAGE_BACKEND=storage,
        database=DatabaseConfig(DATABASE_URL=overrides.pop("database_url", "sqlite://")),
        auth=AuthConfig(
            REQUIRE_AUTH_FOR_MUTATIONS=require_auth,
            PASSWORD_HASH_METHOD=overrides.pop("hash_method", "pbkdf2:sha256:100000"),
        ),
        seed=SeedConfig(SEED_ON_STARTUP=seed),
        security=SecurityConfig(
            ENABLE_RATE_LIMIT=rate_limit,
            RL_LIMIT=overrides.pop("rl_limit", 10),
            TRUSTED_PROXIES=overrides.pop("trusted_proxies", 0),
        ),
        **overrides,
    )


@pytest.fixture()
def make_app() -> Callable[..., Flask]:
    def _make(*, hasher: PasswordHasher | None = None, **kwargs: Any) -> Flask:
        return create_app(
            build_config(**kwargs),
            password_hasher=hasher if hasher is not None else DeterministicHasher(),
            configure_logging=False,
        )

    return _make


@pytest.fixture()
def app(make_app: Callable[..., Flask]) -> Flask:
    return make_app()


@pytest.fixture()
def client(app: Flask):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def sql_app() -> Flask:
    app = create_app(
        build_config(storage="sql"),
        configure_logging=False,
    )
    yield app
    app.extensions["venue_backend"].dispose()
