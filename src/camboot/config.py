"""Configuration for camboot"""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def _env_float(name: str, default: float, minimum: float | None = None) -> float:
    try:
        value = float(os.getenv(name, default))
    except ValueError:
        value = default
    if minimum is not None:
        value = max(value, minimum)
    return value


class Config:
    """Boot-relevant settings, read once from the environment"""

    # Paths
    STATE_DIR = Path(os.getenv("STATE_DIR", Path.home() / ".local" / "state" / "camboot"))

    # Remote view service (both credentials required to count as configured)
    REMOTE_VIEW_CLIENT_ID = os.getenv("REMOTE_VIEW_CLIENT_ID", "")
    REMOTE_VIEW_CLIENT_SECRET = os.getenv("REMOTE_VIEW_CLIENT_SECRET", "")
    REMOTE_VIEW_AUTO_START = _env_bool("REMOTE_VIEW_AUTO_START")

    # Local preferences
    AUTO_START_RECORDING = _env_bool("AUTO_START_RECORDING")
    FLOATING_WINDOW_ENABLED = _env_bool("FLOATING_WINDOW_ENABLED")

    # Foreground keep-alive
    FOREGROUND_UNIT = os.getenv("FOREGROUND_UNIT", "camboot-keepalive.service")
    FOREGROUND_TITLE = os.getenv("FOREGROUND_TITLE", "camboot started on boot")
    FOREGROUND_MESSAGE = os.getenv("FOREGROUND_MESSAGE", "Service is running")

    # Periodic keep-alive (minutes between checks, at least one)
    KEEPALIVE_INTERVAL_MINUTES = _env_float("KEEPALIVE_INTERVAL_MINUTES", 15.0, minimum=1.0)

    # Main subsystem (recording / overlay / remote view)
    MAIN_SUBSYSTEM_COMMAND = os.getenv("MAIN_SUBSYSTEM_COMMAND", "camcorder")

    # Seconds the boot sequence may take before a warning is logged
    BOOT_TIME_BUDGET = _env_float("BOOT_TIME_BUDGET", 1.0)

    DEBUG = _env_bool("DEBUG")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

    @property
    def pid_file(self) -> Path:
        return self.STATE_DIR / "main_subsystem.pid"


config = Config()
