from pathlib import Path
from typing import Annotated, List, Literal

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Concert Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    # Comma-separated in env files; NoDecode keeps pydantic-settings from JSON-parsing it
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            if v.lstrip().startswith('['):
                return orjson.loads(v)
            return [i.strip() for i in v.split(',') if i.strip()]
        if isinstance(v, list):
            return v
        return []

    # Identity forwarded by the upstream auth gateway
    USER_ID_HEADER: str = 'X-User-Id'

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'concert_booking'

    # SQLAlchemy pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds
    DB_POOL_RECYCLE: int = 1800  # seconds
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:'
            f'{self.POSTGRES_PASSWORD.get_secret_value()}@'
            f'{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Redis
    REDIS_HOST: str = 'localhost'
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: str = ''
    REDIS_KEY_PREFIX: str = ''
    REDIS_DECODE_RESPONSES: bool = True

    # Redis connection pool
    REDIS_POOL_MAX_CONNECTIONS: int = 50
    REDIS_POOL_SOCKET_TIMEOUT: int = 5  # Socket read/write timeout (seconds)
    REDIS_POOL_SOCKET_CONNECT_TIMEOUT: int = 5  # Connection timeout (seconds)
    REDIS_POOL_SOCKET_KEEPALIVE: bool = True
    REDIS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # seconds

    # Read-through cache
    CACHE_BACKEND: Literal['redis', 'memory'] = 'redis'
    CACHE_TTL_SECONDS: int = 300

    # Tracing
    SERVICE_NAME: str = 'concert-booking'
    DEPLOY_ENV: str = 'local_dev'
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = None
    OTEL_CONSOLE_EXPORT: bool = False


settings = Settings()  # type: ignore
