from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "LMS_ADMIN_"
DEFAULT_BASE_URL = "http://localhost:5000/api/"
TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})
FALSY = frozenset({"0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True)
class SDKConfig:
    """Connection settings for the LMS admin API."""

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    access_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "SDKConfig":
        load_env_file(env_file)
        token = env_value("TOKEN", "").strip()
        return cls(
            base_url=with_trailing_slash(env_value("BASE_URL", DEFAULT_BASE_URL)),
            timeout_seconds=float(env_value("TIMEOUT_SECONDS", "30")),
            verify_ssl=parse_bool(env_value("VERIFY_SSL", "true"), default=True),
            access_token=token or None,
        )


def env_value(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def with_trailing_slash(url: str) -> str:
    url = url.strip() or DEFAULT_BASE_URL
    return url.rstrip("/") + "/"


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    token = str(value).strip().lower() if value is not None else ""
    if token in TRUTHY:
        return True
    if token in FALSY:
        return False
    return default


def load_env_file(path: str) -> None:
    """Copies ``KEY=value`` pairs into the environment; variables already set win."""
    env_path = Path(path)
    if not env_path.is_file():
        return
    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if entry.startswith("export "):
            entry = entry[len("export "):].lstrip()
        if not entry or entry.startswith("#"):
            continue
        key, sep, value = entry.partition("=")
        if not sep:
            continue
        os.environ.setdefault(key.strip(), value.strip().strip("'\""))
