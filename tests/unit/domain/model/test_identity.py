"""Unit tests for identity variants and registry key derivation."""

import pytest
from pydantic import ValidationError

from outpost.domain.error import (
    InvalidEmailError,
    InvalidPhoneError,
    InvalidProviderError,
)
from outpost.domain.model import (
    DefaultIdentity,
    EmailIdentity,
    PhoneIdentity,
    derive_key,
    new_identity,
    registry_key,
)
from outpost.domain.value import NoCredential
from tests.conftest import password


class TestNewIdentity:
    """Tests for the identity factory."""

    def test_selects_variant_by_provider_type(self):
        """Should pick the email, phone or default variant."""
        assert isinstance(new_identity("email", "a@example.com"), EmailIdentity)
        assert isinstance(new_identity("phone", "+11235550123"), PhoneIdentity)
        assert isinstance(new_identity("google", "subject-1"), DefaultIdentity)
        assert isinstance(new_identity("UserId", "0123abcd"), DefaultIdentity)

    def test_defaults_to_no_credential(self):
        """Identities without a credential never validate."""
        identity = new_identity("google", "subject-1")

        assert isinstance(identity.credential, NoCredential)
        assert identity.verify("") is False
        assert identity.verify("anything") is False

    def test_identity_is_immutable(self):
        """Identities cannot be changed after construction."""
        identity = new_identity("google", "subject-1", password("secret"))

        with pytest.raises(ValidationError):
            identity.provider_key = "subject-2"  # type: ignore[misc]

    def test_credential_not_in_repr(self):
        """Secrets should not leak through repr."""
        identity = new_identity("google", "subject-1", password("top-secret"))

        assert "top-secret" not in repr(identity)


class TestMatchesAndVerify:
    """Tests for identity matching and credential checks."""

    def test_matches_exact_pair_only(self):
        identity = new_identity("google", "subject-1")

        assert identity.matches("google", "subject-1")
        assert not identity.matches("google", "subject-2")
        assert not identity.matches("github", "subject-1")

    def test_verify_delegates_to_credential(self):
        identity = new_identity("google", "subject-1", password("secret"))

        assert identity.verify("secret") is True
        assert identity.verify("wrong") is False


class TestDefaultIdentityKey:
    """Tests for opaque provider keys."""

    def test_non_empty_key_accepted(self):
        assert new_identity("google", "k").identity_key() == "providerInfo:google:k"

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidProviderError) as exc_info:
            new_identity("google", "").identity_key()

        assert exc_info.value.provider_type == "google"


class TestEmailIdentityKey:
    """Tests for email provider keys."""

    def test_raw_address_accepted(self):
        identity = new_identity("email", "user@example.com")

        assert identity.identity_key() == "providerInfo:email:user@example.com"

    def test_mixed_case_address_kept_verbatim(self):
        identity = new_identity("email", "User@Example.com")

        assert identity.identity_key() == "providerInfo:email:User@Example.com"

    def test_dotless_domain_accepted(self):
        """Intranet hosts have no top-level domain."""
        identity = new_identity("email", "admin@mailhost")

        assert identity.identity_key() == "providerInfo:email:admin@mailhost"

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "invalid-email",
            "key-1",
            "John Doe <john@example.com>",
            "<john@example.com>",
            " john@example.com",
            "john@example.com ",
            "a@b@example.com",
        ],
    )
    def test_decorated_or_malformed_address_rejected(self, key):
        with pytest.raises(InvalidEmailError):
            new_identity("email", key).identity_key()

    def test_email_error_is_invalid_provider(self):
        """Email failures are a kind of invalid provider error."""
        with pytest.raises(InvalidProviderError):
            new_identity("email", "not-an-email").identity_key()


class TestPhoneIdentityKey:
    """Tests for phone provider keys."""

    def test_e164_number_accepted(self):
        identity = new_identity("phone", "+11235550123")

        assert identity.identity_key() == "providerInfo:phone:+11235550123"

    def test_minimum_length_accepted(self):
        assert new_identity("phone", "+1234567").identity_key()

    @pytest.mark.parametrize(
        "key",
        [
            "5550123",  # no leading +
            "11235550123",  # no leading +
            "+123456",  # too short
            "+1 235 550 123",  # spaces
            "+1-235-550-123",  # dashes
            "+12355501a3",  # letters
            "++12355501",  # second plus
        ],
    )
    def test_invalid_numbers_rejected(self, key):
        with pytest.raises(InvalidPhoneError):
            new_identity("phone", key).identity_key()

    def test_phone_error_is_distinguishable(self):
        """Phone failures are invalid provider errors of their own type."""
        with pytest.raises(InvalidProviderError) as exc_info:
            new_identity("phone", "5550123").identity_key()

        assert isinstance(exc_info.value, InvalidPhoneError)
        assert not isinstance(exc_info.value, InvalidEmailError)


class TestRegistryKey:
    """Tests for registry key determinism and injectivity."""

    def test_deterministic(self):
        assert derive_key("google", "abc") == derive_key("google", "abc")
        assert derive_key("email", "a@example.com") == derive_key(
            "email", "a@example.com"
        )

    def test_credential_does_not_affect_key(self):
        first = new_identity("google", "abc", password("one"))
        second = new_identity("google", "abc", password("two"))

        assert first.identity_key() == second.identity_key()

    def test_distinct_pairs_give_distinct_keys(self):
        pairs = [
            ("google", "abc"),
            ("github", "abc"),
            ("google", "abcd"),
            ("a:b", "c"),
            ("a", "b:c"),
            ("a%3Ab", "c"),
        ]

        keys = {registry_key(provider_type, key) for provider_type, key in pairs}

        assert len(keys) == len(pairs)

    def test_colon_in_provider_type_cannot_collide(self):
        assert registry_key("a:b", "c") != registry_key("a", "b:c")

    def test_derive_key_validates(self):
        with pytest.raises(InvalidProviderError):
            derive_key("google", "")
