"""Durable repository implementations."""

from outpost.persistence.repository.user import SqlUserRepository

__all__ = ["SqlUserRepository"]
