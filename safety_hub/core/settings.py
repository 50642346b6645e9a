"""
Core settings and environment variables for Safety Hub.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Safety Hub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:8080,http://127.0.0.1:5173"

    # Firebase (Firestore + Storage through the Admin SDK)
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    FIREBASE_STORAGE_BUCKET: Optional[str] = None

    # Firebase Auth (Identity Toolkit REST, web API key)
    FIREBASE_API_KEY: str = ""
    AUTH_TIMEOUT_SECONDS: float = 10.0

    # Local persisted state (admin flag, trusted contacts, auth session)
    LOCAL_STATE_PATH: str = "./local_state.json"

    # Evidence uploads
    EVIDENCE_MAX_BYTES: int = 25 * 1024 * 1024

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
