"""Domain value objects for Outpost."""

from outpost.domain.value.credential import (
    Credential,
    NoCredential,
    OAuthCredential,
    PasswordCredential,
    StoredCredential,
    stored_credential_adapter,
)
from outpost.domain.value.identifiers import RegistryKey, UserId
from outpost.domain.value.types import ProviderType

__all__ = [
    # Identifiers
    "UserId",
    "RegistryKey",
    # Types
    "ProviderType",
    # Credentials
    "Credential",
    "NoCredential",
    "PasswordCredential",
    "OAuthCredential",
    "StoredCredential",
    "stored_credential_adapter",
]
