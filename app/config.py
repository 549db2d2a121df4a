from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()

TRUTHY = {"1", "true", "yes", "on"}


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in TRUTHY


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    tasks_storage_key: str = "tasks"
    theme_storage_key: str = "focusboard-theme"
    reject_past_due_dates: bool = True


load_env()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip() or f"sqlite:///{PROJECT_ROOT / 'focusboard.db'}"

SETTINGS = Settings(
    database_url=DATABASE_URL,
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    tasks_storage_key=os.getenv("TASKS_STORAGE_KEY", "").strip() or "tasks",
    theme_storage_key=os.getenv("THEME_STORAGE_KEY", "").strip() or "focusboard-theme",
    reject_past_due_dates=_env_flag("REJECT_PAST_DUE_DATES", True),
)
