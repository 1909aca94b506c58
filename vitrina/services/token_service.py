"""
Creación y verificación de JWTs (access y refresh) con PyJWT.

- Access: claims sub, role, type=access, iat, exp, jti. Vida según rol
  (user/admin) configurable en Settings.
- Refresh: claims sub, type=refresh, iat, exp, jti. Firmado con
  `jwt_refresh_secret` si está definido; si no, con `jwt_secret`.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import uuid4

import jwt

from vitrina.core.config import Settings
from vitrina.core.exceptions import InvalidToken

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _access_lifetime(self, role: str) -> timedelta:
        if role == ROLE_ADMIN:
            return timedelta(days=self.settings.admin_access_token_expire_days)
        return timedelta(days=self.settings.user_access_token_expire_days)

    def _secret(self, token_type: str) -> str:
        secret = self.settings.refresh_secret if token_type == "refresh" else self.settings.jwt_secret
        if not secret:
            raise RuntimeError("JWT_SECRET no configurado")
        return secret

    def _encode(self, payload: Dict[str, Any], lifetime: timedelta) -> str:
        now = _now_utc()
        payload = {
            **payload,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": str(uuid4()),
        }
        return jwt.encode(payload, self._secret(payload["type"]), algorithm=self.settings.jwt_algorithm)

    def issue_access(self, subject_id: Any, role: str) -> str:
        return self._encode(
            {"sub": str(subject_id), "role": role, "type": "access"},
            self._access_lifetime(role),
        )

    def issue_refresh(self, subject_id: Any) -> str:
        return self._encode(
            {"sub": str(subject_id), "type": "refresh"},
            timedelta(days=self.settings.refresh_token_expire_days),
        )

    def verify(self, token: str, expected_type: str = "access") -> Dict[str, Any]:
        """
        Decodifica y valida firma/expiración/tipo. Devuelve los claims.
        Lanza InvalidToken en cualquier fallo.
        """
        try:
            payload = jwt.decode(
                token,
                key=self._secret(expected_type),
                algorithms=[self.settings.jwt_algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token expired")
        except jwt.InvalidTokenError:
            raise InvalidToken("Invalid token")
        if payload.get("type") != expected_type or not payload.get("sub"):
            raise InvalidToken("Invalid token")
        return payload
