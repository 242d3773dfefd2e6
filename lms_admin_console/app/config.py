from __future__ import annotations

from dataclasses import dataclass

from clients.lms_admin_sdk.config import SDKConfig, env_value

DEFAULT_AUTO_REFRESH_SECONDS = 300
DEFAULT_SEARCH_DEBOUNCE_MS = 350
DEFAULT_EXPORT_DIR = "out/exports"


@dataclass(frozen=True)
class AppConfig:
    sdk: SDKConfig
    auto_refresh_seconds: int
    search_debounce_ms: int
    export_dir: str

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        sdk = SDKConfig.from_env(env_file)
        config = cls(
            sdk=sdk,
            auto_refresh_seconds=int(env_value("AUTO_REFRESH_SECONDS", str(DEFAULT_AUTO_REFRESH_SECONDS))),
            search_debounce_ms=int(env_value("SEARCH_DEBOUNCE_MS", str(DEFAULT_SEARCH_DEBOUNCE_MS))),
            export_dir=env_value("EXPORT_DIR", DEFAULT_EXPORT_DIR).strip(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.sdk.timeout_seconds <= 0:
            raise ValueError("LMS_ADMIN_TIMEOUT_SECONDS must be greater than 0")
        if self.auto_refresh_seconds < 1:
            raise ValueError("LMS_ADMIN_AUTO_REFRESH_SECONDS must be >= 1")
        if self.search_debounce_ms < 0:
            raise ValueError("LMS_ADMIN_SEARCH_DEBOUNCE_MS must be >= 0")
        if not self.export_dir:
            raise ValueError("LMS_ADMIN_EXPORT_DIR cannot be empty")
