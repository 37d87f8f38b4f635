# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from venue_backend.domain.users.entities import User as DomainUser
from venue_backend.domain.users.exceptions import UserAlreadyExistsError
from venue_backend.domain.users.repositories import UserRepository
from venue_backend.infrastructure.db.models import User
from venue_backend.infrastructure.db.session import session_scope
from venue_backend.shared.errors import StorageError
from venue_backend.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=row.created_at or datetime.now(UTC),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.scalars(select(User).where(User.username == username)).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("user_lookup_failed") from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("user_lookup_failed") from exc

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same name.
            logger.info(f"users.add: duplicate username={user.username}")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.add: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("user_create_failed") from exc

    def count(self) -> int:
        try:
            with session_scope(self._session_factory) as session:
                return int(session.scalar(select(func.count()).select_from(User)) or 0)
        except SQLAlchemyError as exc:
            logger.error(f"users.count: storage failure ({type(exc).__name__}: {exc})")
            raise StorageError("user_count_failed") from exc
