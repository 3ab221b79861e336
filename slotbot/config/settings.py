# slotbot/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./slots.db"


def _require(env: dict[str, str], key: str) -> str:
    v = env.get(key)
    if v is None or not v.strip():
        raise RuntimeError(f"Missing required environment variable: {key}")
    return v.strip()


def _to_int(value: str, key_name: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise RuntimeError(f"Invalid integer for {key_name}: {value!r}") from e


def _optional_int(env: dict[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    value = _to_int(raw, key)
    if value < 0:
        raise RuntimeError(f"{key} must be >= 0, got {value}")
    return value


def _is_dev(environment: str) -> bool:
    return environment.lower() in {"dev", "development", "local"}


@dataclass(frozen=True, slots=True)
class Settings:
    # --- required ---
    bot_token: str

    # --- optional ---
    database_url: str = DEFAULT_DATABASE_URL

    # --- environment ---
    environment: str = "production"  # production | development

    # --- throttling (API boundary) ---
    spin_cooldown_seconds: int = 5
    rate_limit_per_minute: int = 100

    # --- leaderboard projection ---
    leaderboard_refresh_minutes: int = 5

    @property
    def is_dev(self) -> bool:
        return _is_dev(self.environment)

    @classmethod
    def load(cls) -> "Settings":
        """
        Loads from process env (and .env if present).
        Fails fast for required fields.
        """
        load_dotenv()
        env = os.environ

        bot_token = _require(env, "BOT_TOKEN")
        database_url = (env.get("DATABASE_URL") or DEFAULT_DATABASE_URL).strip()
        environment = (env.get("ENVIRONMENT") or "production").strip() or "production"

        # dev gets a much looser general limit (same split as the web API had)
        default_rate = 1000 if _is_dev(environment) else 100

        return cls(
            bot_token=bot_token,
            database_url=database_url,
            environment=environment,
            spin_cooldown_seconds=_optional_int(env, "SPIN_COOLDOWN_SECONDS", 5),
            rate_limit_per_minute=_optional_int(env, "RATE_LIMIT_PER_MINUTE", default_rate),
            leaderboard_refresh_minutes=_optional_int(env, "LEADERBOARD_REFRESH_MINUTES", 5),
        )
