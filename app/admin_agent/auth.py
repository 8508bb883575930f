from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

ADMIN_TOKEN_ALGORITHM = "HS256"
ADMIN_TOKEN_EXPIRE_MINUTES = 60

_bearer = HTTPBearer(auto_error=False)


def create_admin_token(
    auth_secret: str,
    *,
    email: str,
    extra: Optional[Dict[str, Any]] = None,
    expires_minutes: int = ADMIN_TOKEN_EXPIRE_MINUTES,
) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": email,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, auth_secret, algorithm=ADMIN_TOKEN_ALGORITHM)


def decode_admin_token(token: str, auth_secret: str) -> Dict[str, Any]:
    return jwt.decode(token, auth_secret, algorithms=[ADMIN_TOKEN_ALGORITHM])


def admin_user_dependency(auth_secret: str):
    def _dependency(
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    ) -> Dict[str, Any]:
        if credentials is None or credentials.scheme.lower() != "bearer":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Admin não autenticado",
                headers={"WWW-Authenticate": "Bearer"},
            )
        try:
            payload = decode_admin_token(credentials.credentials, auth_secret)
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token inválido ou expirado",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return payload

    return _dependency
