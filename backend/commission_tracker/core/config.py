from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Commission Statement Tracker"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./commission_tracker.db"

    # Client side (upload pipeline, dashboard)
    API_BASE_URL: str = "http://localhost:8000"
    HTTP_TIMEOUT: float = 30.0
    UPLOAD_CONCURRENCY: int = 1  # 1 = one file at a time
    DASHBOARD_REFRESH_DELAY: float = 1.0  # let the carrier upsert settle
    ASSISTANT_RESPONSE_DELAY: float = 1.0

    # Carrier upsert date handling
    CARRIER_DATE_POLICY: Literal["overwrite_always", "set_once"] = "overwrite_always"

    # Seed demo reps on startup when the reps table is empty
    SEED_DEMO_DATA: bool = True

    # Extra CORS origin for a deployed frontend
    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
