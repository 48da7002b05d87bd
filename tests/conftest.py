"""Test configuration and fixtures."""

import pytest

from outpost.domain.error import IdentifierGenerationError
from outpost.domain.service import AuthorizationService, IdentifierGenerator
from outpost.domain.value import PasswordCredential
from outpost.persistence.repository.inmemory import InMemoryUserRepository


def password(secret: str) -> PasswordCredential:
    """Build a password credential whose stored hash is the secret itself."""
    return PasswordCredential(hashed_password=secret)


class SequentialIdentifierGenerator(IdentifierGenerator):
    """Deterministic generator yielding ``user-0``, ``user-1``, ..."""

    def __init__(self) -> None:
        self.count = 0

    def generate(self) -> str:
        value = f"user-{self.count}"
        self.count += 1
        return value


class FailingIdentifierGenerator(IdentifierGenerator):
    """Generator whose randomness source is always unavailable."""

    def generate(self) -> str:
        raise IdentifierGenerationError("randomness failed")


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Fresh in-memory repository."""
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repository: InMemoryUserRepository) -> AuthorizationService:
    """Authorization service with deterministic ids over the fresh repository."""
    return AuthorizationService(
        user_repository=user_repository,
        identifier_generator=SequentialIdentifierGenerator(),
    )
