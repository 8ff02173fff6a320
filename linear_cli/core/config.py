import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    LINEAR_API_KEY: str | None = None
    LINEAR_API_URL: str = "https://api.linear.app/graphql"

    # HTTP
    LINEAR_TIMEOUT: float = Field(default=30.0, gt=0)
    LINEAR_MAX_ATTEMPTS: int = Field(default=1, ge=1)  # 1 = 不重试

    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def get_log_level(self) -> int:
        """LOG_LEVEL 转换为 logging 级别，无法识别时回退到 WARNING"""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
        return logging.WARNING


settings = Settings()
