"""Authorization domain service."""

import logfire

from outpost.domain.error import (
    AuthenticationFailedError,
    DomainError,
    DuplicateFieldError,
    NotFoundError,
)
from outpost.domain.model import User, new_identity
from outpost.domain.repository import UserRepository
from outpost.domain.service.base import Service
from outpost.domain.service.identifier_service import IdentifierGenerator
from outpost.domain.value import Credential, ProviderType, UserId


class AuthorizationService(Service):
    """Domain service for registering, finding and authenticating users.

    Uniqueness and atomicity are guaranteed by the repository; this
    service decides which identities a user gets and when credentials are
    checked. Several services may share one repository.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        identifier_generator: IdentifierGenerator,
    ) -> None:
        """Initialize authorization service.

        Args:
            user_repository: User repository
            identifier_generator: Source of new user ids
        """
        self.user_repository = user_repository
        self.identifier_generator = identifier_generator

    async def create_user(
        self,
        email: str,
        provider_type: str,
        provider_key: str,
        credential: Credential,
    ) -> User:
        """Register a new user.

        The user gets three identities sharing ``credential``: the one
        supplied, an ``email`` identity for ``email`` and a ``UserId``
        self-identity for the generated id.

        Args:
            email: Display/primary email
            provider_type: Provider type of the login identity
            provider_key: Provider key of the login identity
            credential: Credential bound to every new identity

        Returns:
            The registered user

        Raises:
            IdentifierGenerationError: If no user id could be generated
            InvalidProviderError: If any identity has an invalid key
            DuplicateFieldError: If any identity belongs to another user
        """
        with logfire.span(
            "authorization_service.create_user",
            email=email,
            provider_type=provider_type,
        ):
            user_id = UserId(self.identifier_generator.generate())

            user = User(
                id=user_id,
                email=email,
                identities=(
                    new_identity(provider_type, provider_key, credential),
                    new_identity(ProviderType.EMAIL.value, email, credential),
                    new_identity(ProviderType.USER_ID.value, user_id, credential),
                ),
            )
            try:
                await self.user_repository.save(user)
            except DomainError as e:
                logfire.warn(
                    "User registration rejected",
                    email=email,
                    provider_type=provider_type,
                    error=str(e),
                )
                raise

            logfire.info("User created", user_id=user.id, provider_type=provider_type)
            return user

    async def get_user(self, email: str) -> User:
        """Get user by their email identity.

        Raises:
            InvalidProviderError: If ``email`` is not a valid address
            NotFoundError: If no user has the email identity
        """
        return await self.get_user_by_identity(ProviderType.EMAIL.value, email)

    async def get_user_by_identity(self, provider_type: str, provider_key: str) -> User:
        """Get user by any of their identities.

        Raises:
            InvalidProviderError: If the provider key is invalid
            NotFoundError: If no user owns the identity
        """
        with logfire.span(
            "authorization_service.get_user_by_identity",
            provider_type=provider_type,
        ):
            user = await self.user_repository.find(provider_type, provider_key)
            logfire.info("User found", provider_type=provider_type, user_id=user.id)
            return user

    async def get_user_by_id(self, user_id: str) -> User:
        """Get user through their ``UserId`` self-identity.

        Raises:
            InvalidProviderError: If ``user_id`` is empty
            NotFoundError: If no user has this id
        """
        return await self.get_user_by_identity(ProviderType.USER_ID.value, user_id)

    async def login(self, provider_type: str, provider_key: str, attempt: str) -> User:
        """Authenticate a user through one identity.

        Every failure is reported the same way so callers cannot learn
        whether the identity exists.

        Args:
            provider_type: Provider type of the identity
            provider_key: Provider key of the identity
            attempt: Secret to check against the identity's credential

        Returns:
            The authenticated user

        Raises:
            AuthenticationFailedError: If authentication fails for any reason
        """
        with logfire.span("authorization_service.login", provider_type=provider_type):
            try:
                user = await self.user_repository.find(provider_type, provider_key)
            except DomainError as e:
                logfire.warn(
                    "Login failed", provider_type=provider_type, reason=type(e).__name__
                )
                raise AuthenticationFailedError() from None

            if not user.authenticate(provider_type, provider_key, attempt):
                logfire.warn(
                    "Login failed", provider_type=provider_type, reason="credential"
                )
                raise AuthenticationFailedError()

            logfire.info("User logged in", provider_type=provider_type, user_id=user.id)
            return user

    async def add_identity(
        self,
        user_id: str,
        provider_type: str,
        provider_key: str,
        credential: Credential,
    ) -> User:
        """Link a new identity to an existing user.

        An identity the user already has is replaced (e.g. to rotate its
        credential). Identities owned by another user cannot be claimed.

        Args:
            user_id: Id of the acting user
            provider_type: Provider type of the new identity
            provider_key: Provider key of the new identity
            credential: Credential for the new identity

        Returns:
            The updated user

        Raises:
            NotFoundError: If the acting user does not exist
            InvalidProviderError: If the provider key is invalid
            DuplicateFieldError: If the identity belongs to another user
        """
        with logfire.span(
            "authorization_service.add_identity",
            user_id=user_id,
            provider_type=provider_type,
        ):
            user = await self.get_user_by_id(user_id)

            identity = new_identity(provider_type, provider_key, credential)
            identity.identity_key()

            try:
                owner = await self.user_repository.find(provider_type, provider_key)
            except NotFoundError:
                owner = None
            if owner is not None and owner.id != user.id:
                logfire.warn(
                    "Identity owned by another user",
                    user_id=user.id,
                    provider_type=provider_type,
                )
                raise DuplicateFieldError(provider_type, provider_key)

            updated = user.add_identity(identity)
            await self.user_repository.save(updated)

            logfire.info(
                "Identity added",
                user_id=user.id,
                provider_type=provider_type,
                identity_count=len(updated.identities),
            )
            return updated
