"""Domain repository interfaces."""

from outpost.domain.repository.user import UserRepository

__all__ = ["UserRepository"]
