"""
Esquemas Pydantic para las colecciones `user` y `admin`.

Reglas clave:
- Campos en snake_case.
- `email` se guarda siempre en minúsculas.
- La contraseña viaja en texto plano solo en el payload; se persiste como `password_hash`.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from vitrina.api.schemas.auth import PASSWORD_MIN_LENGTH, normalize_phone


class _Contact(BaseModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def _lower_email(cls, v: Optional[EmailStr]) -> Optional[str]:
        return str(v).lower() if v else None

    @field_validator("phone", check_fields=False)
    @classmethod
    def _phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)


class UserUpdate(_Contact):
    """Actualización parcial del perfil; campos ausentes no se tocan."""
    fullname: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=PASSWORD_MIN_LENGTH)


class AdminCreate(_Contact):
    # Opcionales en el esquema: la ausencia se reporta como "All fields are required"
    username: Optional[str] = None
    fullname: Optional[str] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    email: Optional[EmailStr] = None
    profile_picture: Optional[str] = None
    bio: Optional[str] = None


class AdminUpdate(_Contact):
    username: Optional[str] = None
    fullname: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=PASSWORD_MIN_LENGTH)
