"""Core value types for a boot event (structured view)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .state_machine import BootState


class BootStep(Enum):
    FOREGROUND = "foreground keep-alive"
    SCHEDULER = "periodic keep-alive scheduler"
    CONFIG = "configuration read"
    MAIN_SUBSYSTEM = "main subsystem launch"


@dataclass(frozen=True)
class BootDecision:
    remote_view_requested: bool
    auto_record_requested: bool
    overlay_requested: bool

    @property
    def should_launch_main_subsystem(self) -> bool:
        return self.remote_view_requested or self.auto_record_requested or self.overlay_requested

    def reasons(self) -> list[str]:
        """Names of the preferences that asked for the main subsystem."""
        reasons = []
        if self.remote_view_requested:
            reasons.append("remote view auto-start")
        if self.auto_record_requested:
            reasons.append("auto-start recording")
        if self.overlay_requested:
            reasons.append("floating overlay")
        return reasons


@dataclass(frozen=True)
class LaunchContext:
    triggered_from_boot: bool = True
    silent: bool = True

    def as_args(self) -> list[str]:
        args = []
        if self.triggered_from_boot:
            args.append("--from-boot")
        if self.silent:
            args.append("--silent")
        return args


@dataclass(frozen=True)
class BootReport:
    """Outcome of one boot sequence. Built per invocation, never retained."""

    decision: BootDecision
    failed_steps: tuple[BootStep, ...] = ()
    main_launched: bool = False
    elapsed: float = 0.0
    final_state: BootState = BootState.IDLE

    @property
    def ok(self) -> bool:
        return not self.failed_steps
