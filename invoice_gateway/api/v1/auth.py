"""POST /v1/auth/authorize - credentials check for the sign-in flow"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from invoice_gateway.api.v1.schemas import AuthorizedUserResponse
from invoice_gateway.api.dependencies import get_credential_verifier
from invoice_gateway.infrastructure.auth.verifier import CredentialVerifier

router = APIRouter()


@router.post("/auth/authorize", response_model=AuthorizedUserResponse)
async def authorize(
    credentials: Any = Body(...),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Check an email/password pair.

    The body is accepted as-is so malformed input is rejected the same way as
    a wrong password. Session issuance is left to the caller; the password
    hash is dropped here.
    """
    user = await verifier.authorize(credentials)

    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return AuthorizedUserResponse(id=user.id, name=user.name, email=user.email)
