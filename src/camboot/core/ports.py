"""Core ports (interfaces) for camboot.

These protocols define the boundaries between the boot orchestration and the
collaborators it drives: two read-only configuration sources and three
launchers. They are intentionally small so the orchestrator can be exercised
with fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .config_model import LaunchContext


@runtime_checkable
class RemoteViewConfigSource(Protocol):
    """Remote-view service settings."""

    def is_remote_view_configured(self) -> bool:
        """True when credentials for the remote-view service are present."""

    def is_remote_view_auto_start(self) -> bool:
        """True when the remote-view service should start on boot."""


@runtime_checkable
class LocalPreferencesSource(Protocol):
    """Local recording/overlay preferences."""

    def is_auto_start_recording_enabled(self) -> bool:
        """True when recording should start automatically."""

    def is_floating_overlay_enabled(self) -> bool:
        """True when the floating overlay is enabled."""


@runtime_checkable
class ForegroundKeepAliveLauncher(Protocol):
    """Keeps the hosting process resident. Best-effort, must not block."""

    def start(self, host: Any, title: str, message: str) -> None:
        """Start (or re-assert) the foreground keep-alive service."""


@runtime_checkable
class PeriodicKeepAliveScheduler(Protocol):
    """Registers the recurring keep-alive task."""

    def ensure_scheduled(self, host: Any) -> None:
        """Register the periodic task; a no-op if it is already registered."""


@runtime_checkable
class MainSubsystemLauncher(Protocol):
    """Starts recording/overlay/remote-view initialization."""

    def launch(self, host: Any, launch_context: "LaunchContext") -> None:
        """Schedule the main subsystem start and return immediately."""
