"""Identity entity.

An identity binds one authentication channel (email address, phone
number, OAuth subject, ...) to a credential. Each provider type has its
own syntax rule for the provider key; the rule must pass before the
identity can be turned into a registry key.
"""

import re
from abc import ABC, abstractmethod
from urllib.parse import quote

from email_validator import EmailNotValidError, validate_email
from pydantic import Field

from outpost.domain.error import (
    InvalidEmailError,
    InvalidPhoneError,
    InvalidProviderError,
)
from outpost.domain.model.common import DomainModel
from outpost.domain.value import Credential, NoCredential, ProviderType, RegistryKey

_PHONE_PATTERN = re.compile(r"\+[0-9]+")
_PHONE_MIN_LENGTH = 8


def registry_key(provider_type: str, provider_key: str) -> RegistryKey:
    """Build the registry key for a provider type/key pair.

    The provider type is percent-encoded so it never contains ``:``; the
    first separator after the prefix therefore always ends the type and
    distinct pairs can never produce the same key.
    """
    return RegistryKey(f"providerInfo:{quote(provider_type, safe='')}:{provider_key}")


class Identity(DomainModel, ABC):
    """Provider-bound claim on a user.

    Identities are immutable: replacing a credential means building a
    new identity with ``new_identity``.
    """

    provider_type: str
    provider_key: str
    credential: Credential = Field(default_factory=NoCredential, repr=False)

    @abstractmethod
    def check_provider_key(self) -> None:
        """Validate the provider key against this provider type's rule.

        Raises:
            InvalidProviderError: If the key is not acceptable
        """
        pass

    def identity_key(self) -> RegistryKey:
        """Derive the registry key for this identity.

        Returns:
            Registry key for (provider_type, provider_key)

        Raises:
            InvalidProviderError: If the provider key is invalid
        """
        self.check_provider_key()
        return registry_key(self.provider_type, self.provider_key)

    def matches(self, provider_type: str, provider_key: str) -> bool:
        """Check whether this identity is the given provider type/key pair."""
        return (
            self.provider_type == provider_type and self.provider_key == provider_key
        )

    def verify(self, attempt: str) -> bool:
        """Ask this identity's credential to validate an attempt."""
        return self.credential.is_valid(attempt)


class DefaultIdentity(Identity):
    """Opaque identity (OAuth subjects, usernames, user ids).

    Any non-empty provider key is accepted.
    """

    def check_provider_key(self) -> None:
        if not self.provider_key:
            raise InvalidProviderError(
                self.provider_type, self.provider_key, "provider key must not be empty"
            )


class EmailIdentity(Identity):
    """Email address identity.

    The key must be a bare address (``user@domain.com``): display names,
    angle brackets and surrounding whitespace are rejected. The address is
    kept as written, so case and dotless domains are left alone.
    """

    def check_provider_key(self) -> None:
        try:
            parsed = validate_email(
                self.provider_key,
                check_deliverability=False,
                globally_deliverable=False,
            )
        except EmailNotValidError as e:
            raise InvalidEmailError(self.provider_key, str(e)) from e
        if parsed.original != self.provider_key:
            raise InvalidEmailError(
                self.provider_key, "email must be in raw format (user@domain.com)"
            )


class PhoneIdentity(Identity):
    """Phone number identity in E.164 format (``+1234567890``)."""

    def check_provider_key(self) -> None:
        key = self.provider_key
        if not key.startswith("+") or len(key) < _PHONE_MIN_LENGTH:
            raise InvalidPhoneError(
                key, "must be in E.164 format (e.g., +1234567890)"
            )
        if not _PHONE_PATTERN.fullmatch(key):
            raise InvalidPhoneError(key, "contains non-digit characters")


_IDENTITY_TYPES: dict[str, type[Identity]] = {
    ProviderType.EMAIL.value: EmailIdentity,
    ProviderType.PHONE.value: PhoneIdentity,
}


def new_identity(
    provider_type: str,
    provider_key: str,
    credential: Credential | None = None,
) -> Identity:
    """Build the identity variant for a provider type.

    Args:
        provider_type: Provider type tag (``email``, ``phone``, anything else)
        provider_key: Provider-specific identifier
        credential: Credential bound to the identity (defaults to none)

    Returns:
        Identity of the variant selected by ``provider_type``
    """
    identity_class = _IDENTITY_TYPES.get(provider_type, DefaultIdentity)
    if credential is None:
        credential = NoCredential()
    return identity_class(
        provider_type=provider_type,
        provider_key=provider_key,
        credential=credential,
    )


def derive_key(provider_type: str, provider_key: str) -> RegistryKey:
    """Validate a provider type/key pair and return its registry key.

    Raises:
        InvalidProviderError: If the provider key is invalid for its type
    """
    return new_identity(provider_type, provider_key).identity_key()
