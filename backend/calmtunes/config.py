# backend/calmtunes/config.py
from __future__ import annotations
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from calmtunes.exceptions import UsageError

_TRUE_VALUES = ("1", "true", "yes", "on")


def _flag(value: Optional[str], default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


class Settings(BaseModel):
    """
    Process-wide configuration, built once at start-up and passed by reference
    into the connection provider, the auth gate and the CLI entry points.
    """

    environment: str = "development"

    # db creds: DATABASE_URL wins, discrete fields are the fallback
    database_url: Optional[str] = None
    db_ssl_relaxed: bool = True
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "calmtunes"

    # basic-auth gate
    basic_auth_enabled: bool = False
    basic_auth_user: Optional[str] = None
    basic_auth_pass: Optional[str] = None

    # admin bootstrap
    admin_email: str = "admin@calmtunes.com"
    admin_name: str = "Admin User"
    admin_password: Optional[str] = None

    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values = {
            "environment": env.get("ENVIRONMENT", "development"),
            "database_url": env.get("DATABASE_URL") or None,
            "db_ssl_relaxed": _flag(env.get("DB_SSL_RELAXED"), default=True),
            "db_host": env.get("DB_HOST", "localhost"),
            "db_port": env.get("DB_PORT", "5432"),
            "db_user": env.get("DB_USER", "postgres"),
            "db_password": env.get("DB_PASSWORD", "postgres"),
            "db_name": env.get("DB_NAME", "calmtunes"),
            # 원본과 동일하게 정확히 'true'일 때만 활성화
            "basic_auth_enabled": env.get("BASIC_AUTH_ENABLED") == "true",
            "basic_auth_user": env.get("BASIC_AUTH_USER"),
            "basic_auth_pass": env.get("BASIC_AUTH_PASS"),
            "admin_email": env.get("ADMIN_EMAIL", "admin@calmtunes.com"),
            "admin_name": env.get("ADMIN_NAME", "Admin User"),
            "admin_password": env.get("ADMIN_PASSWORD") or None,
            "log_level": env.get("LOG_LEVEL", "INFO").upper(),
            "log_dir": env.get("LOG_DIR") or None,
        }
        try:
            return cls(**values)
        except ValidationError as exc:
            raise UsageError(f"Invalid configuration: {exc}") from exc


def load_settings() -> Settings:
    """.env 로드 후 환경변수에서 Settings 생성"""
    load_dotenv()
    return Settings.from_env()
