"""Domain model entities for Outpost."""

from outpost.domain.model.identity import (
    DefaultIdentity,
    EmailIdentity,
    Identity,
    PhoneIdentity,
    derive_key,
    new_identity,
    registry_key,
)
from outpost.domain.model.user import User

__all__ = [
    "User",
    "Identity",
    "DefaultIdentity",
    "EmailIdentity",
    "PhoneIdentity",
    "new_identity",
    "derive_key",
    "registry_key",
]
