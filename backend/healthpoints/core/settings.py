"""
Configuration centralisée pour l'application 21 Points
Utilise pydantic-settings pour la gestion des variables d'environnement
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator
from typing import List


class Settings(BaseSettings):
    """Configuration de l'application"""

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///./healthpoints.db",
        description="URL de la base de données (PostgreSQL en production)"
    )

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        description="Clé secrète pour signer les JWT (obligatoire, pas de valeur par défaut)"
    )
    JWT_ALGORITHM: str = Field(default="HS512")
    JWT_TOKEN_VALIDITY_SECONDS: int = Field(default=86400)
    JWT_TOKEN_VALIDITY_SECONDS_FOR_REMEMBER_ME: int = Field(default=2592000)

    # Nom de l'application côté client (préfixe des headers d'alerte)
    APPLICATION_NAME: str = Field(default="twentyOnePointsApp")

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20)
    MAX_PAGE_SIZE: int = Field(default=2000)

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=[],
        description="Origines autorisées pour CORS (configuré automatiquement selon ENVIRONMENT si vide)"
    )
    FRONTEND_URL: str = Field(
        default="http://localhost:9000",
        description="URL du frontend Angular"
    )

    # Monitoring (Sentry)
    SENTRY_DSN: str = Field(
        default="",
        description="DSN Sentry pour le error tracking (vide = Sentry desactive)"
    )

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True)

    # Application
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(
        default="",
        description="Niveau de logging (auto-configuré selon ENVIRONMENT si vide)"
    )
    LOG_FILE: str = Field(
        default="app.log",
        description="Fichier de log rotatif hors production (vide = pas de fichier)"
    )

    @model_validator(mode="after")
    def _configure_environment(self) -> "Settings":
        """Configure DEBUG et LOG_LEVEL selon ENVIRONMENT."""
        is_prod = self.ENVIRONMENT == "production"
        # En production, forcer DEBUG=False
        if is_prod:
            self.DEBUG = False
        # LOG_LEVEL par défaut selon ENVIRONMENT
        if not self.LOG_LEVEL:
            self.LOG_LEVEL = "WARNING" if is_prod else "INFO"
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        return self

    @model_validator(mode="after")
    def _set_default_origins(self) -> "Settings":
        """Définit les origines CORS par défaut selon ENVIRONMENT si non configurées."""
        if not self.ALLOWED_ORIGINS and self.ENVIRONMENT != "production":
            self.ALLOWED_ORIGINS = [
                "http://localhost:9000",
                "http://127.0.0.1:9000",
                "http://localhost:4200",
            ]
        # Toujours inclure FRONTEND_URL dans les origines autorisees
        frontend = self.FRONTEND_URL.rstrip("/")
        if frontend and frontend not in self.ALLOWED_ORIGINS:
            self.ALLOWED_ORIGINS.append(frontend)
        return self

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


def get_settings() -> Settings:
    """Récupère la configuration"""
    return Settings()
