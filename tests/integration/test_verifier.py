"""Integration tests for the credential verifier"""

import logging
import pytest
from unittest.mock import AsyncMock, patch
from invoice_gateway.domain.credentials import hash_password
from invoice_gateway.domain.exceptions import DataAccessError
from invoice_gateway.infrastructure.auth.verifier import CredentialVerifier
from invoice_gateway.infrastructure.database.models import UserModel


async def test_authorize_correct_credentials(database, sample_data):
    verifier = CredentialVerifier(database)

    user = await verifier.authorize({"email": "user@nextmail.com", "password": "123456"})

    assert user is not None
    assert user.id == "410544b2-4001-4271-9855-fec4b6a6442a"
    assert user.email == "user@nextmail.com"


async def test_authorize_wrong_password(database, sample_data):
    verifier = CredentialVerifier(database)

    assert await verifier.authorize({"email": "user@nextmail.com", "password": "654321"}) is None


async def test_authorize_unknown_email(database, sample_data):
    verifier = CredentialVerifier(database)

    assert await verifier.authorize({"email": "nobody@nextmail.com", "password": "123456"}) is None


@pytest.mark.parametrize(
    "credentials",
    [
        {"email": "a@b.com", "password": "short"},
        {"email": "not-an-email", "password": "123456"},
        {"email": "user@nextmail.com"},
        None,
        "user@nextmail.com:123456",
    ],
)
async def test_authorize_malformed_input_skips_lookup(database, credentials):
    verifier = CredentialVerifier(database)

    with patch("invoice_gateway.infrastructure.auth.verifier.get_user", new_callable=AsyncMock) as mock_get_user:
        assert await verifier.authorize(credentials) is None

    mock_get_user.assert_not_awaited()


async def test_authorize_unreadable_stored_hash(database, add_rows):
    await add_rows(UserModel(id="u2", name="Broken", email="broken@nextmail.com", password="plaintext"))
    verifier = CredentialVerifier(database)

    assert await verifier.authorize({"email": "broken@nextmail.com", "password": "plaintext"}) is None


async def test_authorize_lookup_failure_propagates(database):
    verifier = CredentialVerifier(database)

    with patch.object(database, "fetch_one", AsyncMock(side_effect=RuntimeError("pool exhausted"))):
        with pytest.raises(DataAccessError, match="Failed to fetch user."):
            await verifier.authorize({"email": "user@nextmail.com", "password": "123456"})


async def test_authorize_uses_first_matching_row(database):
    """Duplicate emails are not expected; the first row returned wins"""
    first = {"id": "u1", "name": "First", "email": "dup@nextmail.com", "password": hash_password("123456", rounds=4)}
    verifier = CredentialVerifier(database)

    with patch.object(database, "fetch_one", AsyncMock(return_value=first)):
        user = await verifier.authorize({"email": "dup@nextmail.com", "password": "123456"})

    assert user is not None
    assert user.id == "u1"


async def test_authorize_mixed_case_email_matches_stored_address(database, add_rows):
    await add_rows(
        UserModel(id="u3", name="Jane", email="jane@NextMail.com", password=hash_password("123456", rounds=4))
    )
    verifier = CredentialVerifier(database)

    user = await verifier.authorize({"email": "jane@NextMail.com", "password": "123456"})

    assert user is not None
    assert user.id == "u3"


async def test_authorize_unreadable_hash_is_logged_with_context(database, add_rows, caplog):
    await add_rows(UserModel(id="u4", name="Broken", email="broken@nextmail.com", password="plaintext"))
    verifier = CredentialVerifier(database)

    with caplog.at_level(logging.INFO):
        assert await verifier.authorize({"email": "broken@nextmail.com", "password": "plaintext"}) is None

    warning = next(r for r in caplog.records if r.getMessage() == "Unreadable password hash")
    assert warning.levelno == logging.WARNING
    assert warning.step == "authorize"
    assert warning.reason == "invalid_hash"
    assert warning.user_id == "u4"
