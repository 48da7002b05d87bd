"""Credential value objects.

A credential is a capability attached to an identity that answers one
question: does this attempt unlock the identity? How the secret was
produced (password hashing, OAuth token exchange) happens outside the
core; credentials only compare.
"""

import hmac
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from outpost.domain.value.common import ValueObject


def _constant_time_equals(expected: str, attempt: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), attempt.encode("utf-8"))


class Credential(ValueObject, ABC):
    """Secret-verification capability.

    Subclasses set a unique ``kind`` tag so stored credentials can be
    rebuilt by the persistence layer.
    """

    kind: str

    @abstractmethod
    def is_valid(self, attempt: str) -> bool:
        """Check whether an attempted secret matches this credential.

        Args:
            attempt: Secret supplied by the caller

        Returns:
            True if the attempt is accepted
        """
        pass


class NoCredential(Credential):
    """Credential that never validates."""

    kind: Literal["none"] = "none"

    def is_valid(self, attempt: str) -> bool:
        return False


class PasswordCredential(Credential):
    """Password credential holding an already hashed secret.

    The attempt must be hashed by the caller with the same scheme before
    it reaches this object.
    """

    kind: Literal["password"] = "password"
    hashed_password: str = Field(repr=False)

    def is_valid(self, attempt: str) -> bool:
        return _constant_time_equals(self.hashed_password, attempt)


class OAuthCredential(Credential):
    """OAuth token credential.

    Validates an attempt against the access token. Tokens with an
    ``expiry`` in the past never validate; refreshing them is left to the
    OAuth collaborator.
    """

    kind: Literal["oauth"] = "oauth"
    access_token: str = Field(repr=False)
    refresh_token: str | None = Field(default=None, repr=False)
    token_type: str = "Bearer"
    expiry: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the access token has expired.

        Naive expiry timestamps are treated as UTC.

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            True if an expiry is set and lies at or before ``now``
        """
        if self.expiry is None:
            return False
        now = now or datetime.now(timezone.utc)
        expiry = self.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return expiry <= now

    def is_valid(self, attempt: str) -> bool:
        if self.is_expired():
            return False
        return _constant_time_equals(self.access_token, attempt)


StoredCredential = Annotated[
    Union[NoCredential, PasswordCredential, OAuthCredential],
    Field(discriminator="kind"),
]

# Rebuilds a credential from its ``model_dump()`` form
stored_credential_adapter: TypeAdapter[StoredCredential] = TypeAdapter(
    StoredCredential
)
