"""Configuration for the channel analytics service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()



def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    youtube_api_key: str
    default_max_results: int
    max_results_cap: int
    youtube_timeout_seconds: int
    default_channel_handle: str
    output_folder: str
    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        max_results_cap = max(1, _env_int("MAX_RESULTS_CAP", 200))
        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            default_max_results=min(max(1, _env_int("DEFAULT_MAX_RESULTS", 100)), max_results_cap),
            max_results_cap=max_results_cap,
            youtube_timeout_seconds=max(1, _env_int("YOUTUBE_TIMEOUT_SECONDS", 30)),
            default_channel_handle=os.getenv("DEFAULT_CHANNEL_HANDLE", "@SnapbackSports1"),
            output_folder=os.getenv("OUTPUT_FOLDER", ".tmp/channel_reports"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "DEFAULT_MAX_RESULTS": self.default_max_results,
            "MAX_RESULTS_CAP": self.max_results_cap,
            "YOUTUBE_TIMEOUT_SECONDS": self.youtube_timeout_seconds,
            "DEFAULT_CHANNEL_HANDLE": self.default_channel_handle,
            "OUTPUT_FOLDER": self.output_folder,
            "LOG_LEVEL": self.log_level,
        }
