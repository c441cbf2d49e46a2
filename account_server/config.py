# account_server/config.py

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from account_server.core.errors import ConfigError


DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"
DEFAULT_CORS_ORIGINS = "https://minor-project-front.vercel.app"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, built once at startup and read-only afterwards.
    The token secret has no default: set JWT_SECRET in the environment or .env.
    """
    jwt_secret: str
    database_url: str = DEFAULT_DATABASE_URL
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 60 * 24 * 30
    api_prefix: str = "/api/users"
    cors_origins: tuple[str, ...] = (DEFAULT_CORS_ORIGINS,)
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Builds Settings from the process environment (after loading a local .env)
    or from an explicit mapping.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    secret = (env.get("JWT_SECRET") or "").strip()
    if not secret:
        raise ConfigError("JWT_SECRET is not set")

    expire_minutes = _env_int(env, "TOKEN_EXPIRE_MINUTES", 60 * 24 * 30)
    if expire_minutes < 1:
        raise ConfigError("TOKEN_EXPIRE_MINUTES must be positive")

    prefix = env.get("API_PREFIX", "/api/users").strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix

    return Settings(
        jwt_secret=secret,
        database_url=env.get("DATABASE_URL") or DEFAULT_DATABASE_URL,
        jwt_algorithm=env.get("JWT_ALGORITHM") or "HS256",
        token_expire_minutes=expire_minutes,
        api_prefix=prefix,
        cors_origins=_split_origins(env.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        host=env.get("HOST") or "0.0.0.0",
        port=_env_int(env, "PORT", 5000),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
