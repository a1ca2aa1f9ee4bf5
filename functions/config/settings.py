import logging
from pydantic_settings import BaseSettings
from pathlib import Path

# Get absolute path to functions directory (config/settings.py -> functions/)
_functions_dir = Path(__file__).parent.parent
_env_local = _functions_dir / '.env.local'
_env_file = _functions_dir / '.env'


class Settings(BaseSettings):
    """Trigger settings"""

    # Deployment
    FUNCTIONS_REGION: str = "us-central1"
    FIRESTORE_DATABASE: str = "(default)"  # Database the triggers listen on and write to

    # Aggregates
    RATING_DECIMALS: int = 2  # Decimal places for worker.avgRating

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        # Prioritize .env.local for local development, fallback to .env
        # Use absolute paths to avoid working directory issues
        env_file = str(_env_local) if _env_local.exists() else str(_env_file)
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from environment file

    def get_log_level(self) -> int:
        """Resolve LOG_LEVEL name to a logging level (unknown names fall back to INFO)"""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


settings = Settings()
