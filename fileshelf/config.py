from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8')

    app_name: str = 'Fileshelf'
    app_host: str = '0.0.0.0'
    app_port: int = 3000
    storage_root: str = 'uploads'
    static_dir: str = 'static'
    log_level: str = 'info'
    cors_origins: str = '*'
    upload_chunk_size: int = Field(default=1024 * 1024, ge=4096, le=64 * 1024 * 1024)


settings = Settings()
