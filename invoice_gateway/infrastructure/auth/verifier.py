"""Credentials authorize-callback backed by the users table"""

import asyncio
from typing import Any, Optional

from invoice_gateway.domain.credentials import check_password, parse_credentials
from invoice_gateway.domain.exceptions import CredentialsValidationError
from invoice_gateway.domain.models import User
from invoice_gateway.infrastructure.database.queries import get_user
from invoice_gateway.infrastructure.database.session import Database
from invoice_gateway.infrastructure.observability.logging import (
    log_rejected_credentials,
    log_unreadable_password_hash,
)
from invoice_gateway.infrastructure.observability.metrics import record_authorization


class CredentialVerifier:
    """Checks submitted email/password pairs against stored bcrypt hashes"""

    def __init__(self, db: Database):
        self.db = db

    async def authorize(self, credentials: Any) -> Optional[User]:
        """
        Validate credentials and return the matching user.

        Flow:
        1. Validate shape (email syntax, password >= 6 chars); no lookup on failure
        2. Look up the user by exact email
        3. Compare the password with the stored hash

        Returns None for any rejection. The returned User still carries the
        password hash; callers issuing a session must strip it.

        Raises:
            DataAccessError: the user lookup failed
        """
        try:
            parsed = parse_credentials(credentials)
        except CredentialsValidationError:
            return self._reject("malformed")

        user = await get_user(self.db, parsed.email)
        if user is None:
            return self._reject("unknown_email")

        try:
            matches = await asyncio.to_thread(check_password, parsed.password, user.password_hash)
        except ValueError as e:
            log_unreadable_password_hash(user.id, e)
            return self._reject("invalid_hash")

        if not matches:
            return self._reject("password_mismatch")

        record_authorization(granted=True)
        return user

    def _reject(self, reason: str) -> None:
        log_rejected_credentials(reason)
        record_authorization(granted=False)
        return None
