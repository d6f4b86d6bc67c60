from .user_repository import UserRepository, InMemoryUserRepository, SqlUserRepository

__all__ = ["UserRepository", "InMemoryUserRepository", "SqlUserRepository"]
