from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import Optional

# Explicitly load .env.local
load_dotenv(".env.local")

VERSION = "2.2.0"
DEFAULT_API_URL = "https://api.opentok.com"

class Settings(BaseSettings):
    OPENTOK_API_KEY: Optional[int] = None
    OPENTOK_API_SECRET: Optional[str] = None
    OPENTOK_API_URL: str = DEFAULT_API_URL
    OPENTOK_TIMEOUT: float = 10.0
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env.local", extra="ignore")

settings = Settings()
