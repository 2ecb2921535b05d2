from functools import lru_cache
from pathlib import Path
from typing import Protocol

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ToolbarConfig(Protocol):
    def is_enabled(self) -> bool:
        ...

    def retention_count(self) -> int:
        ...


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    toolbar_enabled: bool = Field(default=False, alias="TOOLBAR_ENABLED")
    toolbar_keep_last: int = Field(default=10, ge=0, alias="TOOLBAR_KEEP_LAST")
    var_dir: str = Field(default="var", alias="VAR_DIR")
    area_code: str = Field(default="frontend", alias="AREA_CODE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def var_path(self) -> Path:
        return Path(self.var_dir)

    def is_enabled(self) -> bool:
        return self.toolbar_enabled

    def retention_count(self) -> int:
        return self.toolbar_keep_last


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
