from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "ClinicDesk Practice Management"
    VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///./clinicdesk.db"

    # "memory" keeps records in-process only, "database" uses DATABASE_URL
    STORAGE_BACKEND: str = "memory"

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Seed an empty store with a demo patient and today's consultation
    SEED_DEMO_DATA: bool = False

    class Config:
        env_file = ".env"


settings = Settings()
