"""Credential shape validation and bcrypt password checks"""

from typing import Any, Optional

import bcrypt
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationError, field_validator

from invoice_gateway.config import settings
from invoice_gateway.domain.exceptions import CredentialsValidationError

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class Credentials(BaseModel):
    """Email and password submitted by a sign-in form"""

    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def check_email_syntax(cls, value: str) -> str:
        """Syntax check only; the address is looked up exactly as submitted"""
        try:
            validate_email(value, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return value


def parse_credentials(raw: Any) -> Credentials:
    """
    Validate the shape of submitted credentials.

    Raises:
        CredentialsValidationError: raw is not a mapping, the email is not a
            valid address, or the password is shorter than 6 characters
    """
    try:
        return Credentials.model_validate(raw)
    except ValidationError as e:
        raise CredentialsValidationError(f"Malformed credentials: {e.error_count()} error(s)") from e


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password for storage (seeding users out of band), rounds default to settings.bcrypt_rounds"""
    if rounds is None:
        rounds = settings.bcrypt_rounds
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """
    Compare a plaintext password against a stored bcrypt hash.

    bcrypt.checkpw re-derives the hash with the stored salt and compares in
    constant time.

    Raises:
        ValueError: stored hash is not a valid bcrypt hash
    """
    return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
