"""
SupportAudit Configuration

Runtime settings read from the environment.

Variables:
    SA_LOG_LEVEL              Logging level for the "supportaudit" logger (INFO)
    SA_DOCS_ENABLED           Expose OpenAPI docs on the service (true)
    SA_SCHEMA_PATH            Policy schema file used as the default schema
    SA_SCHEMA_STRICT_VERSION  Reject schemas with an incompatible format version (true)
    SA_MAX_SESSIONS           Upper bound on in-memory review sessions (1000)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    docs_enabled: bool = True
    schema_path: Optional[str] = None
    schema_strict_version: bool = True
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            log_level=os.getenv("SA_LOG_LEVEL", "INFO").upper(),
            docs_enabled=_env_bool("SA_DOCS_ENABLED", "true"),
            schema_path=os.getenv("SA_SCHEMA_PATH") or None,
            schema_strict_version=_env_bool("SA_SCHEMA_STRICT_VERSION", "true"),
            max_sessions=int(os.getenv("SA_MAX_SESSIONS", "1000")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process (read once)."""
    return Settings.from_env()
