"""
Hashing de contraseñas (argon2id con salt aleatorio por hash).
"""
from typing import Any, Dict

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from argon2.low_level import Type

from vitrina.core.config import Settings


class PasswordHasher:
    def __init__(self, settings: Settings) -> None:
        self._ph = _Argon2Hasher(
            time_cost=settings.password_time_cost,
            memory_cost=settings.password_memory_cost,
            parallelism=settings.password_parallelism,
            hash_len=32,
            salt_len=16,
            type=Type.ID,
        )

    def hash(self, password: str) -> str:
        return self._ph.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        try:
            return self._ph.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def apply_password(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Reemplaza `password` (texto plano) por `password_hash` antes de persistir.

        Sin `password` en los cambios no se toca el hash guardado, así que una
        actualización de otros campos nunca re-hashea un hash.
        """
        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = self.hash(password)
        return changes
