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

DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:3001")


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
    return raw in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    api_host: str = "127.0.0.1"
    api_port: int = 3001
    api_base_url: str = "http://localhost:3001/api/v1"
    public_base_url: str | None = None
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    overdue_sweep_enabled: bool = True
    overdue_sweep_interval_min: float = 60.0


load_env()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set. Create a .env file with your connection string.")

SETTINGS = Settings(
    database_url=DATABASE_URL,
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    api_host=os.getenv("API_HOST", "127.0.0.1"),
    api_port=int(os.getenv("API_PORT", "3001")),
    api_base_url=os.getenv("API_BASE_URL", "http://localhost:3001/api/v1").rstrip("/"),
    public_base_url=os.getenv("PUBLIC_BASE_URL", "").strip().rstrip("/") or None,
    cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
    overdue_sweep_enabled=_env_flag("OVERDUE_SWEEP_ENABLED", True),
    overdue_sweep_interval_min=float(os.getenv("OVERDUE_SWEEP_INTERVAL_MIN", "60")),
)
