import os
import logging
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from the backend .env explicitly (works regardless of cwd)
load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

class Settings(BaseSettings):
    """Application settings"""

    # Base directory
    BASE_DIR: Path = Path(__file__).parent.parent

    # Local enrichment database (fallback to local SQLite if not provided)
    DATABASE_URL: str = os.getenv("DATABASE_URL") or "sqlite+aiosqlite:///./nft_aggregator.db"

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        """Get async database URL (asyncpg for Postgres, aiosqlite for SQLite)"""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        if self.DATABASE_URL.startswith("sqlite:///"):
            return self.DATABASE_URL.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return self.DATABASE_URL

    # Blockchain indexer (GraphQL endpoint)
    INDEXER_URL: str = os.getenv("INDEXER_URL", "https://indexer.chaos.ternoa.com")
    INDEXER_TIMEOUT: float = float(os.getenv("INDEXER_TIMEOUT", "15"))

    # Views from the same address inside this window (seconds) are not counted again
    TIME_BETWEEN_SAME_USER_VIEWS: int = int(os.getenv("TIME_BETWEEN_SAME_USER_VIEWS", "600"))

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://ternoart.io",
        "https://*.ternoart.io",
    ]

    # Pagination
    MAX_PAGE_SIZE: int = 100

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
    }

def configure_logging(level: str = None):
    """Configure root logging once for the process"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()]
    )

# Create global settings instance
settings = Settings()
