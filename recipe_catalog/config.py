from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RECIPE_CATALOG_")

    env: Env = Env.local
    seed: bool = True
    # JSON file with the same shape as seed.DEFAULT_SEED
    seed_file: Optional[Path] = None
    # unset means DEBUG when running locally, INFO elsewhere
    log_level: Optional[str] = None

    def resolved_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.env == Env.local else "INFO"
