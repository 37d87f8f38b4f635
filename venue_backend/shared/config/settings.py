# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DEFAULT_SEED_FILE = Path(__file__).resolve().parents[2] / "data" / "venues.json"

_MIN_SCRYPT_COST = 2**14
_MIN_PBKDF2_ITERATIONS = 100_000
_MIN_SECRET_BYTES = 32

_NESTED_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
)


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///venues.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _NESTED_CONFIG


class AuthConfig(BaseSettings):
    token_ttl_seconds: int = Field(3600, ge=1, alias="TOKEN_TTL_SECONDS")
    token_algorithm: str = Field("HS256", alias="TOKEN_ALGORITHM")
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")
    require_auth_for_mutations: bool = Field(False, alias="REQUIRE_AUTH_FOR_MUTATIONS")

    model_config = _NESTED_CONFIG

    @field_validator("require_auth_for_mutations", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @field_validator("password_hash_method", mode="after")
    @classmethod
    def _check_hash_method(cls, value: str) -> str:
        name, *params = value.split(":")
        if name == "scrypt":
            cost = int(params[0]) if params else _MIN_SCRYPT_COST
            if cost < _MIN_SCRYPT_COST:
                raise ValueError(f"scrypt cost must be at least {_MIN_SCRYPT_COST}")
        elif name == "pbkdf2":
            rounds = int(params[1]) if len(params) > 1 else _MIN_PBKDF2_ITERATIONS
            if rounds < _MIN_PBKDF2_ITERATIONS:
                raise ValueError(f"pbkdf2 needs at least {_MIN_PBKDF2_ITERATIONS} iterations")
        else:
            raise ValueError("PASSWORD_HASH_METHOD must be scrypt or pbkdf2")
        return value


class SeedConfig(BaseSettings):
    on_startup: bool = Field(True, alias="SEED_ON_STARTUP")
    file: Path = Field(_DEFAULT_SEED_FILE, alias="SEED_FILE")

    model_config = _NESTED_CONFIG

    @field_validator("on_startup", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


class SecurityConfig(BaseSettings):
    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(10, alias="RL_LIMIT")
    rate_limit_window: float = Field(60.0, alias="RL_WINDOW")

    # Reverse proxies in front of the app whose X-Forwarded-For is trusted
    trusted_proxies: int = Field(0, ge=0, alias="TRUSTED_PROXIES")

    model_config = _NESTED_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_rate_limit", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _seed_config_factory() -> SeedConfig:
    return SeedConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    storage_backend: str = Field("sql", alias="STORAGE_BACKEND")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    seed: SeedConfig = Field(default_factory=_seed_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    @field_validator("storage_backend", mode="after")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in ("sql", "memory"):
            raise ValueError("STORAGE_BACKEND must be 'sql' or 'memory'")
        return value

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if len(self.secret_key.encode("utf-8")) < _MIN_SECRET_BYTES:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY signs session tokens and must be a random value of at least "
                f"{_MIN_SECRET_BYTES} bytes.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if "*" in self.security.allowed_origins:
            print("\n⚠️  PRODUCTION SECURITY WARNING:", file=sys.stderr)
            print("   ⚠️  CORS allows wildcard (*) origins\n", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "DatabaseConfig", "SecurityConfig", "SeedConfig", "load_config"]
