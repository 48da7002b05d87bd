"""User repository interface."""

from abc import ABC, abstractmethod

from outpost.domain.model.user import User


class UserRepository(ABC):
    """Repository for the User aggregate.

    The repository owns the mapping from registry key to user and is the
    only place where identity-key uniqueness is enforced. Implementations
    live in the persistence layer.
    """

    async def initialize(self) -> None:
        """Prepare storage before first use.

        Durable implementations create their schema and uniqueness
        constraints here. The default does nothing.
        """
        pass

    @abstractmethod
    async def find(self, provider_type: str, provider_key: str) -> User:
        """Find the user owning a provider identity.

        Args:
            provider_type: The identity's provider type
            provider_key: The identity's provider key

        Returns:
            The user the identity is registered to

        Raises:
            InvalidProviderError: If the provider key is invalid for its type
            NotFoundError: If no user owns the identity
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> None:
        """Atomically register every identity of a user.

        Either all of the user's registry keys are written or none are.
        Keys already registered to the same user are not conflicts.

        Args:
            user: The user to save

        Raises:
            InvalidProviderError: If any identity has an invalid provider key
            DuplicateFieldError: If any identity belongs to a different user
        """
        pass
