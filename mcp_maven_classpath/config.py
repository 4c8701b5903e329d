"""Application configuration using pydantic-settings.

All runtime knobs live here with explicit types and defaults. Every field can be
overridden via an environment variable with the same name (case-insensitive).

Notes:
- MAVEN_USER_HOME is the local cache root; jars are looked up under
  ``<MAVEN_USER_HOME>/repository``. It is deliberately not named MAVEN_HOME,
  which conventionally points at the Maven installation instead.
- MVN_COMMAND may be a bare name (searched on PATH) or a path to the executable.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_maven_user_home() -> Path:
    return Path.home() / ".m2"


class Settings(BaseSettings):
    """Top-level application settings.

    Env var precedence follows pydantic-settings rules, e.g.
    ``MAVEN_USER_HOME=/srv/m2`` or ``MVN_COMMAND=/opt/maven/bin/mvn``.
    """

    # Maven
    MAVEN_USER_HOME: Path = Field(default_factory=_default_maven_user_home)
    MVN_COMMAND: str = Field(default="mvn", min_length=1)
    DESCRIPTOR_FILENAME: str = Field(default="pom.xml", min_length=1)

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON: bool = False

    # Transport
    TRANSPORT: Literal["stdio", "http"] = "stdio"

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)


__all__ = ["Settings"]
