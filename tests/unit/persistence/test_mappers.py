"""Unit tests for persistence mappers."""

import pytest

from outpost.domain.model import EmailIdentity, PhoneIdentity, User, new_identity
from outpost.domain.value import Credential, OAuthCredential, UserId
from outpost.persistence.mappers import (
    identity_to_dict,
    row_to_identity,
    rows_to_user,
    user_to_dict,
)
from tests.conftest import password


class UnknownCredential(Credential):
    kind: str = "unknown"

    def is_valid(self, attempt: str) -> bool:
        return True


class TestIdentityMapping:
    """Tests for identity <-> row conversion."""

    def test_identity_row_contents(self):
        identity = new_identity("google", "g1", password("secret"))

        row = identity_to_dict(UserId("u1"), identity, identity.identity_key(), 2)

        assert row == {
            "registry_key": "providerInfo:google:g1",
            "user_id": "u1",
            "provider_type": "google",
            "provider_key": "g1",
            "position": 2,
            "credential": {"kind": "password", "hashed_password": "secret"},
        }

    def test_row_rebuilds_variant_and_credential(self):
        row = {
            "provider_type": "phone",
            "provider_key": "+11235550123",
            "credential": {"kind": "oauth", "access_token": "token"},
        }

        identity = row_to_identity(row)

        assert isinstance(identity, PhoneIdentity)
        assert isinstance(identity.credential, OAuthCredential)
        assert identity.verify("token")

    def test_unknown_credential_rejected(self):
        identity = new_identity("google", "g1", UnknownCredential())

        with pytest.raises(ValueError):
            identity_to_dict(UserId("u1"), identity, identity.identity_key(), 0)


class TestUserMapping:
    """Tests for user <-> row conversion."""

    def test_user_row(self):
        user = User(id=UserId("u1"), email="u1@example.com")

        assert user_to_dict(user) == {"id": "u1", "email": "u1@example.com"}

    def test_rows_to_user_keeps_order(self):
        rows = [
            {
                "id": "u1",
                "email": "u1@example.com",
                "provider_type": "email",
                "provider_key": "u1@example.com",
                "credential": {"kind": "none"},
            },
            {
                "id": "u1",
                "email": "u1@example.com",
                "provider_type": "UserId",
                "provider_key": "u1",
                "credential": {"kind": "none"},
            },
        ]

        user = rows_to_user(rows)

        assert user.id == "u1"
        assert isinstance(user.identities[0], EmailIdentity)
        assert [i.provider_type for i in user.identities] == ["email", "UserId"]
