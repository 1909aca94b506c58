"""
Esquemas Pydantic para operaciones de autenticación.

- Normaliza email (minúsculas) y teléfono (sin espacios).
- Modelos pensados para separar la capa API de la lógica de negocio.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

PASSWORD_MIN_LENGTH = 2


def normalize_phone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = "".join(str(v).split())
    return v or None


class RegisterPayload(BaseModel):
    """Registro de usuario: se requiere email o teléfono."""

    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    fullname: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[EmailStr]) -> Optional[str]:
        return str(v).lower() if v else None

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)

    @model_validator(mode="after")
    def _check_identity(self):
        if not self.email and not self.phone:
            raise ValueError("email or phone is required")
        return self


class LoginPayload(BaseModel):
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[EmailStr]) -> Optional[str]:
        return str(v).lower() if v else None

    @field_validator("phone")
    @classmethod
    def _phone(cls, v: Optional[str]) -> Optional[str]:
        return normalize_phone(v)


class AdminLoginPayload(BaseModel):
    username: str
    password: str


class RefreshPayload(BaseModel):
    refresh_token: str


# === Response models ===

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminTokenOut(TokenOut):
    refresh_token: str
