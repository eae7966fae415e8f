# pairchat/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    PROJECT_NAME: str = "PairChat"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "A FastAPI-based real-time pairwise chat backend"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    TOKEN_ISSUER: str = "pairchat"
    TOKEN_AUDIENCE: str = "pairchat-clients"
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    # activity feed publishing is disabled unless a host is configured
    REDIS_HOST: str | None = None
    REDIS_PORT: int = 6379
    PUBLISH_TIMEOUT_SECONDS: float = 1.0
    OUTBOUND_QUEUE_SIZE: int = 64
    SEND_TIMEOUT_SECONDS: float = 5.0
    ADMIN_USERNAME: str | None = None
    ADMIN_PASSWORD: str | None = None
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="allow")
