"""
Service interfaces (abstract base classes).
"""

from user_storage.services.interfaces.user_repository import IUserRepository

__all__ = ["IUserRepository"]
