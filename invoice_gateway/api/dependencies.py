"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from invoice_gateway.infrastructure.auth.verifier import CredentialVerifier
from invoice_gateway.infrastructure.database.session import Database


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_database(request: Request) -> Database:
    """Provide the Database client owned by the application lifespan"""
    return request.app.state.database


def get_credential_verifier(db: Database = Depends(get_database)) -> CredentialVerifier:
    """Provide a credential verifier bound to the request's database"""
    return CredentialVerifier(db)
