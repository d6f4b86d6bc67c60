from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy import JSON, Column, String
from sqlalchemy.orm import sessionmaker

from ..core.database import Base
from ..models.user import UserRecord


class UserRow(Base):
    __tablename__ = "users"

    email = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False, default="")
    password_hash = Column(String, nullable=False)
    preferences = Column(JSON, nullable=False, default=list)

    def to_record(self) -> UserRecord:
        return UserRecord(
            email=self.email,
            name=self.name or "",
            password_hash=self.password_hash,
            preferences=list(self.preferences or []),
        )


class UserRepository(ABC):
    """Key/value store of users keyed by normalized email."""

    @abstractmethod
    def get(self, email: str) -> Optional[UserRecord]:
        pass

    @abstractmethod
    def save(self, user: UserRecord) -> None:
        """Insert or replace the record stored under ``user.email``."""
        pass


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: Dict[str, UserRecord] = {}

    def get(self, email: str) -> Optional[UserRecord]:
        return self._users.get(email)

    def save(self, user: UserRecord) -> None:
        self._users[user.email] = user

    def __len__(self) -> int:
        return len(self._users)


class SqlUserRepository(UserRepository):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def get(self, email: str) -> Optional[UserRecord]:
        with self.session_factory() as db:
            row = db.get(UserRow, email)
            return row.to_record() if row else None

    def save(self, user: UserRecord) -> None:
        with self.session_factory() as db:
            try:
                db.merge(UserRow(
                    email=user.email,
                    name=user.name,
                    password_hash=user.password_hash,
                    preferences=list(user.preferences),
                ))
                db.commit()
            except Exception:
                db.rollback()
                raise
