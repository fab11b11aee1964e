from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = Field(default="Data Toalha Metrics API", alias="APP_NAME")
    app_version: str = Field(default="1.0.4-BETA", alias="APP_VERSION")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=18791, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")

    data_dir: str = Field(default="data", alias="DATA_DIR")
    state_file: str = Field(default="data/dashboard.db.json", alias="STATE_FILE")
    database_url: str = Field(default="sqlite:///data/landing.db", alias="DATABASE_URL")

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def state_path(self) -> Path:
        return Path(self.state_file)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
