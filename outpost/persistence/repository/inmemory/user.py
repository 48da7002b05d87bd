"""In-memory user repository."""

import threading

from outpost.domain.error import DuplicateFieldError, NotFoundError
from outpost.domain.model import User, derive_key
from outpost.domain.repository.user import UserRepository
from outpost.domain.value import RegistryKey


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository.

    Suitable for single-process use and as the default repository. Each
    instance has its own registry; instances never share state.
    """

    def __init__(self) -> None:
        self._registry: dict[RegistryKey, User] = {}
        # Guards check-then-commit in save and reads in find
        self._lock = threading.Lock()

    async def find(self, provider_type: str, provider_key: str) -> User:
        """Find the user owning a provider identity."""
        key = derive_key(provider_type, provider_key)
        with self._lock:
            user = self._registry.get(key)
        if user is None:
            raise NotFoundError("User", f"{provider_type}:{provider_key}")
        return user

    async def save(self, user: User) -> None:
        """Register every identity of a user, all or nothing."""
        keys = [identity.identity_key() for identity in user.identities]

        with self._lock:
            for identity, key in zip(user.identities, keys):
                existing = self._registry.get(key)
                if existing is not None and existing.id != user.id:
                    raise DuplicateFieldError(
                        identity.provider_type, identity.provider_key
                    )
            for key in keys:
                self._registry[key] = user

    def __len__(self) -> int:
        """Number of registry keys currently mapped."""
        with self._lock:
            return len(self._registry)
