"""Domain services."""

from .authorization_service import AuthorizationService
from .base import Service
from .identifier_service import IdentifierGenerator, RandomIdentifierGenerator

__all__ = [
    "AuthorizationService",
    "IdentifierGenerator",
    "RandomIdentifierGenerator",
    "Service",
]
