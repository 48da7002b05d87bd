"""Domain value types for Outpost."""

from enum import Enum


class ProviderType(str, Enum):
    """Provider types with special meaning to the core.

    Any other string (``google``, ``github``, ...) is a valid provider type
    and is validated with the default rule.
    """

    EMAIL = "email"
    PHONE = "phone"
    USER_ID = "UserId"  # Canonical self-identity present on every user
