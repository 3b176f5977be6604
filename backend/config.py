# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List
from pathlib import Path
from dotenv import load_dotenv

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

# Also export .env values to os.environ (alembic, uvicorn reload workers)
load_dotenv(env_path)

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./cargo_ledger.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Comma separated list, "*" allows every origin
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Analytics report sizes
    ANALYTICS_TOP_CLIENTS: int = 5
    ANALYTICS_MONTHS: int = 6

    # bcrypt work factor (tests lower it)
    BCRYPT_ROUNDS: int = 12

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
