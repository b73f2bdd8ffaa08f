"""
FastAPI dependencies.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from kaptal.database import get_db
from kaptal.exceptions import UnauthorizedError
from kaptal.security import decode_access_token

__all__ = ["get_db", "get_current_user_id"]

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Resolve the authenticated user id from the Authorization header.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Token de autenticação não fornecido")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedError("Token de autenticação inválido ou expirado")

    return str(payload["userId"])
