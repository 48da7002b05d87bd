"""User aggregate root.

A user is known through several interchangeable identities, each with
its own credential. Every user also carries a ``UserId`` self-identity
so it can always be looked up by id.
"""

from typing import Optional

from outpost.domain.model.common import DomainModel
from outpost.domain.model.identity import Identity
from outpost.domain.value import UserId


class User(DomainModel):
    """User aggregate root - provider-agnostic.

    Users are immutable values; linking an identity produces a new user.
    """

    id: UserId
    email: str  # Primary contact, may differ from the login identities
    identities: tuple[Identity, ...] = ()

    def find_identity(self, provider_type: str, provider_key: str) -> Optional[Identity]:
        """Return the identity matching a provider type/key pair, if any."""
        for identity in self.identities:
            if identity.matches(provider_type, provider_key):
                return identity
        return None

    def authenticate(self, provider_type: str, provider_key: str, attempt: str) -> bool:
        """Authenticate an attempt against one of this user's identities.

        Only the credential of the identity matching the provider
        type/key pair is consulted.

        Returns:
            True if a matching identity accepts the attempt
        """
        identity = self.find_identity(provider_type, provider_key)
        if identity is None:
            return False
        return identity.verify(attempt)

    def add_identity(self, identity: Identity) -> "User":
        """Return a copy of this user with an identity linked.

        An existing identity with the same provider type/key is replaced
        in place; otherwise the identity is appended.
        """
        identities: list[Identity] = []
        found = False
        for existing in self.identities:
            if existing.matches(identity.provider_type, identity.provider_key):
                identities.append(identity)
                found = True
            else:
                identities.append(existing)
        if not found:
            identities.append(identity)
        return self.model_copy(update={"identities": tuple(identities)})
