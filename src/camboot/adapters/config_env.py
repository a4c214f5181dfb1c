"""Env configuration adapters exposing the boot-relevant preferences."""

from __future__ import annotations

from ..config import config


class EnvRemoteViewConfig:
    def __init__(self, source=config):
        self._source = source

    def is_remote_view_configured(self) -> bool:
        return bool(self._source.REMOTE_VIEW_CLIENT_ID) and bool(
            self._source.REMOTE_VIEW_CLIENT_SECRET
        )

    def is_remote_view_auto_start(self) -> bool:
        return bool(self._source.REMOTE_VIEW_AUTO_START)


class EnvLocalPreferences:
    def __init__(self, source=config):
        self._source = source

    def is_auto_start_recording_enabled(self) -> bool:
        return bool(self._source.AUTO_START_RECORDING)

    def is_floating_overlay_enabled(self) -> bool:
        return bool(self._source.FLOATING_WINDOW_ENABLED)
