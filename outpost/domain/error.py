"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidProviderError(DomainError):
    """Raised when a provider key fails its provider type's syntax rule."""

    def __init__(self, provider_type: str, provider_key: str, reason: str = ""):
        self.provider_type = provider_type
        self.provider_key = provider_key
        self.reason = reason
        message = f"invalid provider key for {provider_type}: {provider_key!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidEmailError(InvalidProviderError):
    """Raised when an email identity is not a bare mail address."""

    def __init__(self, provider_key: str, reason: str = ""):
        super().__init__("email", provider_key, reason)


class InvalidPhoneError(InvalidProviderError):
    """Raised when a phone identity is not in E.164 format."""

    def __init__(self, provider_key: str, reason: str = ""):
        super().__init__("phone", provider_key, reason)


class DuplicateFieldError(DomainError):
    """Raised when a registry key already belongs to a different user."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"duplicate {field} found: {value}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthenticationFailedError(DomainError):
    """Raised when a login attempt fails for any reason.

    Deliberately carries no detail about which step failed.
    """

    def __init__(self) -> None:
        super().__init__("unable to authenticate, invalid credentials")


class IdentifierGenerationError(DomainError):
    """Raised when a fresh user identifier cannot be produced."""

    pass
