# backend/constructiq/config.py
from typing import Literal
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Database (remote persistence)
    DATABASE_URL: str = "sqlite:///./constructiq.db"  # Default if not in .env

    # Storage Paths
    STORAGE_PATH: Path = Path("storage")
    LOCAL_STORE_PATH: Path | None = None  # Will be set based on STORAGE_PATH
    UPLOADS_PATH: Path | None = None  # Will be set based on STORAGE_PATH

    # Persistence
    PERSISTENCE_BACKEND: Literal["local", "remote"] = "local"
    REFRESH_POLICY: Literal["confirm", "optimistic"] = "confirm"
    STORAGE_KEY_PREFIX: str = "constructiq_"

    # Activity feed retention (global, not per project)
    ACTIVITY_FEED_LIMIT: int = 500

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def model_post_init(self, __context) -> None:
        """Post initialization hook to set derived paths"""
        # Convert STORAGE_PATH to Path if it's a string
        if isinstance(self.STORAGE_PATH, str):
            self.STORAGE_PATH = Path(self.STORAGE_PATH)

        # Set derived paths if not explicitly provided
        self.LOCAL_STORE_PATH = Path(self.LOCAL_STORE_PATH) if self.LOCAL_STORE_PATH else self.STORAGE_PATH / "local"
        self.UPLOADS_PATH = Path(self.UPLOADS_PATH) if self.UPLOADS_PATH else self.STORAGE_PATH / "uploads"

        # Create directories
        self.create_storage_dirs()

    def create_storage_dirs(self) -> None:
        """Create necessary storage directories if they don't exist"""
        for path in [self.STORAGE_PATH, self.LOCAL_STORE_PATH, self.UPLOADS_PATH]:
            path.mkdir(parents=True, exist_ok=True)

settings = Settings()
