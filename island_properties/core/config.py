from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

load_dotenv()


class Settings(BaseSettings):
    # Database (empty URL keeps everything in process memory)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Admin sessions
    SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", "2"))
    REMEMBER_ME_TTL_HOURS: int = int(os.getenv("REMEMBER_ME_TTL_HOURS", str(7 * 24)))
    SESSION_SWEEP_INTERVAL_SECONDS: int = int(os.getenv("SESSION_SWEEP_INTERVAL_SECONDS", "300"))
    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "True") == "True"

    # Bootstrap admin, created at startup when both are set
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
    SEED_SAMPLE_DATA: bool = os.getenv("SEED_SAMPLE_DATA", "True") == "True"

    # App
    APP_NAME: str = os.getenv("APP_NAME", "Island Properties API")
    DEBUG: bool = os.getenv("DEBUG", "True") == "True"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
