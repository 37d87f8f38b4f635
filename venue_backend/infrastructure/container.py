# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from venue_backend.application.services.password_hashing import WerkzeugPasswordHasher
from venue_backend.application.services.tokens import JwtTokenIssuer
from venue_backend.application.use_cases.users.authenticate_user import AuthenticateUseCase
from venue_backend.application.use_cases.users.login_user import LoginUserUseCase
from venue_backend.application.use_cases.users.signup_user import SignupUserUseCase
from venue_backend.application.use_cases.venues import (
    CreateVenueUseCase,
    DeleteVenueUseCase,
    GetVenueUseCase,
    ListVenuesUseCase,
    UpdateVenueUseCase,
)
from venue_backend.domain.users.repositories import PasswordHasher, UserRepository
from venue_backend.domain.venues import VenueRepository
from venue_backend.infrastructure.db import build_engine, build_session_factory, init_db
from venue_backend.infrastructure.repositories.memory import (
    InMemoryUserRepository,
    InMemoryVenueRepository,
)
from venue_backend.infrastructure.repositories.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from venue_backend.infrastructure.repositories.sqlalchemy_venue_repository import (
    SqlAlchemyVenueRepository,
)
from venue_backend.interfaces.http.controllers.auth_controller import AuthController
from venue_backend.interfaces.http.controllers.misc_controller import MiscController
from venue_backend.interfaces.http.controllers.venues_controller import VenuesController
from venue_backend.shared.config import AppConfig


class Container:
    """Builds every process-wide collaborator once from a single config."""

    def __init__(
        self,
        config: AppConfig,
        *,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._password_hasher_override = password_hasher

    @property
    def uses_sql(self) -> bool:
        return self.config.storage_backend == "sql"

    @cached_property
    def engine(self) -> Engine | None:
        if not self.uses_sql:
            return None
        engine = build_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        if self.engine is None:
            raise RuntimeError("session factory requested for the memory backend")
        return build_session_factory(self.engine)

    @cached_property
    def venue_repository(self) -> VenueRepository:
        if self.uses_sql:
            return SqlAlchemyVenueRepository(self.session_factory)
        return InMemoryVenueRepository()

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_sql:
            return SqlAlchemyUserRepository(self.session_factory)
        return InMemoryUserRepository()

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        if self._password_hasher_override is not None:
            return self._password_hasher_override
        return WerkzeugPasswordHasher(self.config.auth.password_hash_method)

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(
            secret=self.config.secret_key,
            ttl_seconds=self.config.auth.token_ttl_seconds,
            algorithm=self.config.auth.token_algorithm,
        )

    # Venue use cases

    @cached_property
    def list_venues_use_case(self) -> ListVenuesUseCase:
        return ListVenuesUseCase(venues=self.venue_repository)

    @cached_property
    def get_venue_use_case(self) -> GetVenueUseCase:
        return GetVenueUseCase(venues=self.venue_repository)

    @cached_property
    def create_venue_use_case(self) -> CreateVenueUseCase:
        return CreateVenueUseCase(venues=self.venue_repository)

    @cached_property
    def update_venue_use_case(self) -> UpdateVenueUseCase:
        return UpdateVenueUseCase(venues=self.venue_repository)

    @cached_property
    def delete_venue_use_case(self) -> DeleteVenueUseCase:
        return DeleteVenueUseCase(venues=self.venue_repository)

    # Auth use cases

    @cached_property
    def signup_use_case(self) -> SignupUserUseCase:
        return SignupUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def authenticate_use_case(self) -> AuthenticateUseCase:
        return AuthenticateUseCase(tokens=self.token_issuer)

    # Controllers

    @cached_property
    def venues_controller(self) -> VenuesController:
        return VenuesController(
            identifiers=self.venue_repository.identifiers,
            list_venues=self.list_venues_use_case,
            get_venue=self.get_venue_use_case,
            create_venue=self.create_venue_use_case,
            update_venue=self.update_venue_use_case,
            delete_venue=self.delete_venue_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            signup_use_case=self.signup_use_case,
            login_use_case=self.login_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def dispose(self) -> None:
        if self.uses_sql and "engine" in self.__dict__ and self.engine is not None:
            self.engine.dispose()
