"""
Configuration for the Image Transform utility.

Settings are read from IMAGE_TRANSFORM_* environment variables and validated
with Pydantic.
"""

import os
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from core.constants import SystemConstants


class SystemSettings(BaseModel):
    """Logging and debug settings"""

    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Root log level")
    debug: bool = Field(default=False, description="Enable debug logging")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in SystemConstants.LOG_LEVELS:
            raise ValueError(f"log_level must be one of {SystemConstants.LOG_LEVELS}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


class Settings(BaseModel):
    """Application settings"""

    system: SystemSettings = Field(default_factory=SystemSettings)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables."""
        env = os.environ if environ is None else environ
        prefix = SystemConstants.ENV_PREFIX

        system: Dict[str, str] = {}
        for field, name in (("log_level", "LOG_LEVEL"), ("debug", "DEBUG")):
            value = env.get(f"{prefix}{name}")
            if value is not None:
                system[field] = value.strip()

        return cls(system=SystemSettings(**system))


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()
