from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: Optional[str] = None
    database_echo: bool = False

    # Calendar day used for queue tickets ("V1-20250101-001")
    business_timezone: str = "UTC"
    queue_allocation_retries: int = 5

    cors_allowed_origins: List[str] = ["http://localhost:3000"]
    log_level: str = "INFO"


settings = Settings()
