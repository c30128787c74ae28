# -*- coding: utf-8 -*-
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """dicelang settings, read from DICELANG_* environment variables or a .env file"""

    model_config = SettingsConfigDict(env_prefix='DICELANG_', env_file='.env',
                                      env_file_encoding='utf-8', extra='ignore')

    log_level: str = 'WARNING'
    log_path: Optional[Path] = None

    # limits for a single throw
    max_dice: int = Field(1000, ge=0)
    max_sides: int = Field(1000, ge=1)


settings = Settings()
