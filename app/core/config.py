from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./trip.db"
    DATABASE_ECHO: bool = False

    # Item store backend: "sql" (relational table) or "redis" (document store)
    ITEM_STORE_BACKEND: str = "sql"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_NAMESPACE: str = "itinerary"

    # Upper bound for every item store call, in seconds
    STORE_TIMEOUT_SECONDS: float = 10.0

    SEED_ON_STARTUP: bool = True
    LOG_LEVEL: str = "INFO"

    # Expense tracker
    BASE_CURRENCY: str = "TWD"
    KRW_TO_TWD_RATE: float = 0.024

    CORS_ORIGIN_REGEX: Optional[str] = (
        r"^(http:\/\/localhost(:\d{1,5})?|http:\/\/127\.0\.0\.1(:\d{1,5})?)$"
    )

    PROJECT_NAME: str = "Seoul Trip Planner API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Day-by-day itinerary, expenses and pre-trip checklist"

    class Config:
        env_file = ".env"


settings = Settings()
