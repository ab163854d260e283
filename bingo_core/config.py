from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    store_url: str
    store_key: str
    host_pin: str
    poll_interval: float
    http_timeout: float
    debug: bool
    port: int

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            store_url=os.getenv("BINGO_STORE_URL", "").rstrip("/"),
            store_key=os.getenv("BINGO_STORE_KEY", ""),
            host_pin=os.getenv("BINGO_HOST_PIN", ""),
            poll_interval=max(0.25, _env_float("BINGO_POLL_INTERVAL", 2.0)),
            http_timeout=_env_float("BINGO_HTTP_TIMEOUT", 10.0),
            debug=_env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0")),
            port=int(os.getenv("PORT", "5000")),
        )


def load_settings(overrides: Optional[dict] = None) -> Settings:
    s = Settings.from_env()
    if not overrides:
        return s
    values = dict(s.__dict__)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
