"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence

from outpost.domain.model import Identity, User, new_identity
from outpost.domain.value import (
    NoCredential,
    OAuthCredential,
    PasswordCredential,
    RegistryKey,
    UserId,
    stored_credential_adapter,
)

# Credential types the identity table knows how to rebuild
STORABLE_CREDENTIALS = (NoCredential, PasswordCredential, OAuthCredential)


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a ``users`` row.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {"id": user.id, "email": user.email}


def identity_to_dict(
    user_id: UserId, identity: Identity, key: RegistryKey, position: int
) -> Dict[str, Any]:
    """Convert an Identity to a ``user_identities`` row.

    Args:
        user_id: Owner of the identity
        identity: Identity domain model
        key: The identity's registry key
        position: Index of the identity within the user

    Returns:
        Dict suitable for database insertion

    Raises:
        ValueError: If the credential type cannot be stored
    """
    if not isinstance(identity.credential, STORABLE_CREDENTIALS):
        raise ValueError(
            f"Cannot store credential of type {type(identity.credential).__name__}"
        )
    return {
        "registry_key": key,
        "user_id": user_id,
        "provider_type": identity.provider_type,
        "provider_key": identity.provider_key,
        "position": position,
        "credential": identity.credential.model_dump(mode="json"),
    }


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert a ``user_identities`` row to an Identity.

    Args:
        row: Database row as dict

    Returns:
        Identity of the variant selected by the stored provider type
    """
    credential = stored_credential_adapter.validate_python(row["credential"])
    return new_identity(row["provider_type"], row["provider_key"], credential)


def rows_to_user(rows: Sequence[Dict[str, Any]]) -> User:
    """Convert joined user/identity rows to a User.

    Args:
        rows: Rows for a single user ordered by identity position

    Returns:
        User domain model
    """
    first = rows[0]
    return User(
        id=UserId(first["id"]),
        email=first["email"],
        identities=tuple(row_to_identity(row) for row in rows),
    )
