"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, Password hashing, Listados.
- Se construye una sola vez en `create_app` y se inyecta donde se necesita
  (no hay un objeto global de configuración).
"""
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Vitrina Admin API"
    api_prefix: str = "/api/v1"
    port: int = Field(8000, validation_alias=AliasChoices("PORT", "VITRINA_PORT"))
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_any: bool = False

    # Mongo
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGO_URI", "MONGODB_URI"),
    )
    mongo_db: str = "vitrina"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False

    # Auth / JWT
    jwt_secret: Optional[str] = None
    # Si no se define, los refresh tokens se firman con jwt_secret
    jwt_refresh_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    user_access_token_expire_days: int = 365
    admin_access_token_expire_days: int = 30
    refresh_token_expire_days: int = 60

    # Password hashing (argon2id)
    password_time_cost: int = 2
    password_memory_cost: int = 51200
    password_parallelism: int = 2

    # Rate limit de login (intentos por minuto por IP)
    login_rate_per_min: int = 10

    # Listados
    default_page_size: int = 10
    max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )

    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def refresh_secret(self) -> Optional[str]:
        return self.jwt_refresh_secret or self.jwt_secret
