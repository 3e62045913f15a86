from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    scoring_config_path: str | None
    embedding_dimension: int
    semantic_matching_enabled: bool


settings = Settings(
    log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    scoring_config_path=_get_env("RESUMEFIT_SCORING_CONFIG"),
    embedding_dimension=_get_env_int("EMBEDDING_DIMENSION", 64),
    semantic_matching_enabled=_get_env_bool("SEMANTIC_MATCHING_ENABLED", True),
)

if settings.embedding_dimension <= 0:
    raise RuntimeError("EMBEDDING_DIMENSION must be greater than 0.")
