import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("BIZTIME_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


def _default_database_url(environment: str) -> str:
    if environment == "test":
        return "postgresql:///biztime_test"
    return "postgresql:///biztime"


@dataclass
class Config:
    environment: str
    database_url: str
    statement_timeout_ms: int = 5000
    pool_min_size: int = 1
    pool_max_size: int = 5
    pool_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("DATABASE_URL", _default_database_url(env)),
            statement_timeout_ms=int(os.environ.get("STATEMENT_TIMEOUT_MS", "5000")),
            pool_min_size=int(os.environ.get("DB_POOL_MIN_SIZE", "1")),
            pool_max_size=int(os.environ.get("DB_POOL_MAX_SIZE", "5")),
            pool_timeout=float(os.environ.get("DB_POOL_TIMEOUT", "10")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


config = Config.from_env()
