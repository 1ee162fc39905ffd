from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`; fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


@dataclass(frozen=True)
class RubimaSettings:
    trace: bool
    log_level: str

    @property
    def effective_level(self) -> int:
        if self.trace:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def load_settings() -> RubimaSettings:
    load_env()
    return RubimaSettings(
        trace=(os.getenv("RUBIMA_TRACE") or "").strip().lower() in _TRUTHY,
        log_level=(os.getenv("RUBIMA_LOG_LEVEL") or "WARNING").strip(),
    )
