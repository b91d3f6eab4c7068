import logging
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_TITLE: str = "Stores API"
    DATABASE_URL: Optional[str] = None
    DB_PATH: str = "stores.db"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]
    MAX_BODY_BYTES: int = 1024 * 1024

    # Root element names used when rendering XML responses
    XML_COLLECTION_ROOT: str = "stores"
    XML_ENTITY_ROOT: str = "store"
    XML_FALLBACK_ROOT: str = "response"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        """DATABASE_URL wins; otherwise a SQLite file at DB_PATH."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DB_PATH}"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Keep request logs visible alongside application logs
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
