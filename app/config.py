from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, ValidationError
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """
    Application Settings

    Optional Environment Variables:
    - GEMINI_API_KEY (can also be stored at runtime via PUT /preferences/api-key)
    - REDIS_URL (empty string keeps history and preferences in memory)
    - IMAGE_DIR, EXPORT_DIR
    """

    PROJECT_NAME: str = "Plant Scanner Service"
    API_V1_STR: str = "/api/v1"

    # Gemini AI Configuration
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_TEMPERATURE: float = 0.2  # lower = more deterministic
    GEMINI_TOP_P: float = 0.9
    GEMINI_TOP_K: int = 40
    GEMINI_TIMEOUT_SECONDS: float = 60.0

    # Key-value store for history and preferences
    REDIS_URL: str = "redis://localhost:6379"
    HISTORY_KEY: str = "scan_history_v1"

    # Local files
    IMAGE_DIR: str = "scan_images"
    IMAGE_QUALITY: int = 85
    EXPORT_DIR: Optional[str] = None  # defaults to the system temp directory

    # Application Configuration
    ENV_MODE: str = "dev"

    @field_validator('GEMINI_API_KEY')
    @classmethod
    def validate_credentials(cls, v: Optional[str]) -> Optional[str]:
        """Reject blank keys; leaving the variable unset is fine"""
        if v is not None and v.strip() == '':
            raise ValueError("Credential cannot be empty")
        return v

    @field_validator('IMAGE_QUALITY')
    @classmethod
    def validate_quality(cls, v: int) -> int:
        if not 1 <= v <= 95:
            raise ValueError("IMAGE_QUALITY must be between 1 and 95")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"
        case_sensitive = True


def get_settings() -> Settings:
    """
    Get application settings with detailed error reporting.

    Raises:
        SystemExit: If an environment variable holds an invalid value
    """
    try:
        settings = Settings()
        logger.info("Configuration loaded successfully")
        logger.info(f"Environment: {settings.ENV_MODE}")
        logger.info(f"Gemini model: {settings.GEMINI_MODEL}")
        logger.info(f"Key-value store: {settings.REDIS_URL or 'in-memory'}")
        return settings
    except ValidationError as e:
        logger.error("Configuration validation failed!")
        logger.error("=" * 60)
        logger.error("INVALID ENVIRONMENT VARIABLES:")
        logger.error("=" * 60)

        for error in e.errors():
            field = error['loc'][0] if error['loc'] else '?'
            logger.error(f"  {field}")
            logger.error(f"     Type: {error['type']}")
            logger.error(f"     Message: {error['msg']}")
            logger.error("")

        logger.error("=" * 60)
        logger.error("Please fix these variables in your .env file or environment")
        logger.error("=" * 60)
        sys.exit(1)


# Singleton settings instance
settings: Optional[Settings] = None

def init_settings() -> Settings:
    """Initialize settings (called once at startup)"""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
