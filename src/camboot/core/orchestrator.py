"""Core boot orchestration for camboot.

Runs the keep-alive -> evaluate -> conditional launch sequence for one boot
event, decoupled from the platform via ports. Every step is isolated: a
failing collaborator is logged and the sequence moves on.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from .config_model import BootDecision, BootReport, BootStep, LaunchContext
from .evaluator import evaluate
from .ports import (
    ForegroundKeepAliveLauncher,
    LocalPreferencesSource,
    MainSubsystemLauncher,
    PeriodicKeepAliveScheduler,
    RemoteViewConfigSource,
)
from .state_machine import BootEvent, BootStateMachine

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "camboot started on boot"
DEFAULT_MESSAGE = "Service is running"
DEFAULT_TIME_BUDGET = 1.0


class BootOrchestrator:
    """Brings background subsystems up after a boot or process restart.

    Holds its collaborators only; nothing about a previous invocation is kept,
    so repeated boot signals each re-derive the decision and re-issue the
    launch calls. De-duplication is up to the launchers.
    """

    def __init__(
        self,
        host: Any,
        remote_view: RemoteViewConfigSource,
        preferences: LocalPreferencesSource,
        foreground: ForegroundKeepAliveLauncher,
        scheduler: PeriodicKeepAliveScheduler,
        main_launcher: MainSubsystemLauncher,
        foreground_title: str = DEFAULT_TITLE,
        foreground_message: str = DEFAULT_MESSAGE,
        time_budget: float = DEFAULT_TIME_BUDGET,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._host = host
        self._remote_view = remote_view
        self._preferences = preferences
        self._foreground = foreground
        self._scheduler = scheduler
        self._main_launcher = main_launcher
        self._foreground_title = foreground_title
        self._foreground_message = foreground_message
        self._time_budget = time_budget
        self._clock = clock

    def on_boot_event(self) -> None:
        """Entry point for the host lifecycle callback. Never raises."""
        try:
            self.run_boot_sequence()
        except Exception:
            # Steps are isolated individually; this only guards the host callback.
            logger.exception("Boot sequence aborted unexpectedly")

    def run_boot_sequence(self) -> BootReport:
        """Run one boot sequence and report what happened."""
        started = self._clock()
        state = BootStateMachine()
        failed: list[BootStep] = []
        logger.info("Boot event received")

        # Foreground service first so the process stays resident.
        if not self._run_step(
            BootStep.FOREGROUND,
            self._foreground.start,
            self._host,
            self._foreground_title,
            self._foreground_message,
        ):
            failed.append(BootStep.FOREGROUND)

        if not self._run_step(BootStep.SCHEDULER, self._scheduler.ensure_scheduled, self._host):
            failed.append(BootStep.SCHEDULER)
        state.transition(BootEvent.KEEPALIVE_ISSUED)

        decision, config_ok = self._read_decision()
        if not config_ok:
            failed.append(BootStep.CONFIG)
        state.transition(BootEvent.DECISION_READY)

        launched = False
        if decision.should_launch_main_subsystem:
            logger.info(
                "Launching main subsystem in background mode (%s)",
                ", ".join(decision.reasons()),
            )
            launched = self._run_step(
                BootStep.MAIN_SUBSYSTEM,
                self._main_launcher.launch,
                self._host,
                LaunchContext(triggered_from_boot=True, silent=True),
            )
            if not launched:
                failed.append(BootStep.MAIN_SUBSYSTEM)
        else:
            logger.info(
                "Main subsystem not needed (remote view, auto-record and overlay all off); "
                "keeping background services only"
            )
        state.transition(BootEvent.LAUNCHES_ISSUED)

        elapsed = self._clock() - started
        if elapsed > self._time_budget:
            logger.warning(
                "Boot sequence took %.3fs, over the %.3fs budget", elapsed, self._time_budget
            )
        if failed:
            logger.warning(
                "Boot sequence finished with failures: %s",
                ", ".join(step.value for step in failed),
            )
        else:
            logger.info("Boot sequence finished in %.3fs", elapsed)

        return BootReport(
            decision=decision,
            failed_steps=tuple(failed),
            main_launched=launched,
            elapsed=elapsed,
            final_state=state.state,
        )

    def _run_step(self, step: BootStep, fn: Callable[..., Any], *args: Any) -> bool:
        try:
            fn(*args)
        except Exception:
            logger.exception("Boot step failed: %s", step.value)
            return False
        logger.debug("Boot step issued: %s", step.value)
        return True

    def _read_decision(self) -> tuple[BootDecision, bool]:
        reads = [
            _read_flag("remote view configured", self._remote_view.is_remote_view_configured),
            _read_flag("remote view auto-start", self._remote_view.is_remote_view_auto_start),
            _read_flag("auto-start recording", self._preferences.is_auto_start_recording_enabled),
            _read_flag("floating overlay", self._preferences.is_floating_overlay_enabled),
        ]
        values = [value for value, _ in reads]
        decision = evaluate(*values)
        logger.debug("Boot decision: %s", decision)
        return decision, all(ok for _, ok in reads)


def _read_flag(name: str, query: Callable[[], bool]) -> tuple[bool, bool]:
    """Read one preference; a failing read counts as False."""
    try:
        return bool(query()), True
    except Exception:
        logger.exception("Could not read %s; treating it as disabled", name)
        return False, False
