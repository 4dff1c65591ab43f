from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import os

class Settings(BaseSettings):
    # App Settings
    app_name: str = "CareerQuest"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "8000"))
    allowed_origins: str = "http://localhost:3000"

    # Database - hosted platforms provide DATABASE_URL, fallback to SQLite for local
    database_url: Optional[str] = None

    # O*NET Web Services (upstream career catalog)
    onet_base_url: str = "https://services.onetcenter.org/ws/"
    onet_username: str = ""
    onet_password: str = ""
    onet_client: str = "careerquest"
    onet_timeout_seconds: float = 15.0

    # Generative backend (OpenAI-compatible endpoint, Gemini by default)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_model: str = "gemini-2.0-flash"
    generation_timeout_seconds: float = 60.0
    roadmap_mock_delay_seconds: float = 0.0

    # Bearer tokens issued by the auth service
    jwt_secret: str = ""

    class Config:
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Auto-detect database URL
        hosted_db = self.database_url or os.getenv("DATABASE_URL")
        if hosted_db:
            # SQLAlchemy async needs postgresql+asyncpg://
            if hosted_db.startswith("postgres://"):
                self.database_url = hosted_db.replace("postgres://", "postgresql+asyncpg://", 1)
            elif hosted_db.startswith("postgresql://"):
                self.database_url = hosted_db.replace("postgresql://", "postgresql+asyncpg://", 1)
            else:
                self.database_url = hosted_db
        else:
            self.database_url = "sqlite+aiosqlite:///./careerquest.db"

    @property
    def generation_enabled(self) -> bool:
        return bool(self.gemini_api_key)

@lru_cache()
def get_settings() -> Settings:
    return Settings()
