"""SQLAlchemy ORM models."""

from acquisitions.models.base import Base
from acquisitions.models.user import USER_ROLES, User

__all__ = ["Base", "USER_ROLES", "User"]
