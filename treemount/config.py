from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8')

    app_name: str = 'Tree Mount'
    app_host: str = '0.0.0.0'
    app_port: int = Field(default=8440, ge=1, le=65535)
    storage_root: str = '/var/lib/treemount'
    mount_path: str = 'keys'
    remove_path_prefix: bool = True
    log_level: str = 'info'
    cors_origins: str = ''


settings = Settings()
