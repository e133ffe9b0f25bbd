from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


REDIS_PORT = 6379


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    mongo_url: str = Field(default="mongodb://localhost:27017/users", alias="MONGO_URL")
    mongo_database: str = Field(default="users", alias="MONGO_DATABASE")
    mongo_timeout_ms: int = Field(default=5000, alias="MONGO_TIMEOUT_MS")
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_timeout_ms: int = Field(default=5000, alias="REDIS_TIMEOUT_MS")
    port: int = Field(default=8080, alias="PORT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=False, alias="ENABLE_METRICS_ENDPOINT")
    instana_agent_available: bool = Field(default=False, alias="INSTANA_AGENT_AVAILABLE")
    instana_agent_host: str = Field(default="localhost", alias="INSTANA_AGENT_HOST")

    @property
    def redis_url(self) -> str:
        return f"redis://{self.redis_host}:{REDIS_PORT}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
