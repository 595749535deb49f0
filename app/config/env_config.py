from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DB_USER: str = "root"
    DB_PASSWORD: str = "root"
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "school_erp"
    DB_ECHO: bool = False

    # Full SQLAlchemy URL, overrides the DB_* parts when set
    DATABASE_URL: Optional[str] = None

    @property
    def database_url(self) -> str:
        """Construct database URL from individual components"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    # JWT Configuration (tokens are issued by the identity service)
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Server bind address for run_server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Frontend URL used to build shareable form links
    FRONTEND_URL: str = "http://localhost:5173"

    # n8n workflow webhook that drafts forms from a prompt
    N8N_FORM_WEBHOOK_URL: str = "http://localhost:5678/webhook/ai-assistant"
    N8N_WEBHOOK_TOKEN: Optional[str] = None
    N8N_TIMEOUT: float = 30.0

    # Logging Configuration
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_TO_FILE: bool = True


# Global settings instance
settings = Settings()
