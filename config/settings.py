"""Application settings using Pydantic Settings."""

from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database Configuration
    mongo_uri: str = "mongodb://localhost:27017/exercise_tracker"
    mongo_db_name: str = "exercise_tracker"
    
    # Application Configuration
    app_name: str = "Exercise Tracker"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    
    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000
    
    # CORS Configuration
    cors_origins: List[str] = ["*"]
    
    # Random userIds to try before giving up on a registration
    user_id_attempts: int = 5
    
    # Static content
    views_dir: Path = BASE_DIR / "views"
    public_dir: Path = BASE_DIR / "public"
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
