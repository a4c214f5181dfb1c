import pytest

from camboot.core.config_model import BootStep, LaunchContext
from camboot.core.orchestrator import BootOrchestrator
from camboot.core.state_machine import BootState
from camboot.core.ports import (
    ForegroundKeepAliveLauncher,
    LocalPreferencesSource,
    MainSubsystemLauncher,
    PeriodicKeepAliveScheduler,
    RemoteViewConfigSource,
)

HOST = object()


class _RemoteView(RemoteViewConfigSource):
    def __init__(self, configured=False, auto_start=False, failing=()):
        self.configured = configured
        self.auto_start = auto_start
        self.failing = set(failing)

    def is_remote_view_configured(self) -> bool:
        if "is_remote_view_configured" in self.failing:
            raise OSError("remote view settings unreadable")
        return self.configured

    def is_remote_view_auto_start(self) -> bool:
        if "is_remote_view_auto_start" in self.failing:
            raise OSError("remote view settings unreadable")
        return self.auto_start


class _Preferences(LocalPreferencesSource):
    def __init__(self, auto_record=False, overlay=False, fail_auto_record=False, failing=()):
        self.auto_record = auto_record
        self.overlay = overlay
        self.failing = set(failing)
        if fail_auto_record:
            self.failing.add("is_auto_start_recording_enabled")

    def is_auto_start_recording_enabled(self) -> bool:
        if "is_auto_start_recording_enabled" in self.failing:
            raise OSError("preferences unreadable")
        return self.auto_record

    def is_floating_overlay_enabled(self) -> bool:
        if "is_floating_overlay_enabled" in self.failing:
            raise OSError("preferences unreadable")
        return self.overlay


class _Foreground(ForegroundKeepAliveLauncher):
    def __init__(self, calls, fail=False):
        self.calls = calls
        self.fail = fail

    def start(self, host, title: str, message: str) -> None:
        self.calls.append(("foreground", host, title, message))
        if self.fail:
            raise RuntimeError("foreground refused")


class _Scheduler(PeriodicKeepAliveScheduler):
    def __init__(self, calls, fail=False):
        self.calls = calls
        self.fail = fail

    def ensure_scheduled(self, host) -> None:
        self.calls.append(("scheduler", host))
        if self.fail:
            raise RuntimeError("scheduler refused")


class _MainLauncher(MainSubsystemLauncher):
    def __init__(self, calls, fail=False):
        self.calls = calls
        self.fail = fail

    def launch(self, host, launch_context) -> None:
        self.calls.append(("main", host, launch_context))
        if self.fail:
            raise RuntimeError("main refused")


def _orchestrator(
    calls,
    remote_view=None,
    preferences=None,
    fail_foreground=False,
    fail_scheduler=False,
    fail_main=False,
    **kwargs,
):
    return BootOrchestrator(
        host=HOST,
        remote_view=remote_view or _RemoteView(),
        preferences=preferences or _Preferences(),
        foreground=_Foreground(calls, fail=fail_foreground),
        scheduler=_Scheduler(calls, fail=fail_scheduler),
        main_launcher=_MainLauncher(calls, fail=fail_main),
        foreground_title="Boot",
        foreground_message="Running",
        **kwargs,
    )


def _steps(calls):
    return [call[0] for call in calls]


def test_nothing_enabled_keeps_background_services_only():
    calls = []
    report = _orchestrator(calls).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler"]
    assert calls[0] == ("foreground", HOST, "Boot", "Running")
    assert report.decision.should_launch_main_subsystem is False
    assert report.main_launched is False
    assert report.ok
    assert report.final_state is BootState.DONE


def test_remote_view_auto_start_launches_silently():
    calls = []
    report = _orchestrator(calls, remote_view=_RemoteView(True, True)).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]
    launch_context = calls[2][2]
    assert launch_context == LaunchContext(triggered_from_boot=True, silent=True)
    assert calls[2][1] is HOST
    assert report.main_launched is True


def test_auto_record_launches_without_remote_view_auto_start():
    calls = []
    report = _orchestrator(
        calls,
        remote_view=_RemoteView(configured=True, auto_start=False),
        preferences=_Preferences(auto_record=True),
    ).run_boot_sequence()

    assert report.decision.remote_view_requested is False
    assert _steps(calls) == ["foreground", "scheduler", "main"]


def test_overlay_only_launches_main_subsystem():
    calls = []
    _orchestrator(calls, preferences=_Preferences(overlay=True)).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]


def test_failed_config_read_counts_as_disabled():
    calls = []
    report = _orchestrator(
        calls, preferences=_Preferences(fail_auto_record=True)
    ).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler"]
    assert report.decision.auto_record_requested is False
    assert report.failed_steps == (BootStep.CONFIG,)
    assert report.final_state is BootState.DONE


def test_failed_config_read_does_not_mask_other_flags():
    calls = []
    report = _orchestrator(
        calls, preferences=_Preferences(overlay=True, fail_auto_record=True)
    ).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]
    assert report.decision.overlay_requested is True


def test_foreground_failure_does_not_stop_other_steps():
    calls = []
    report = _orchestrator(
        calls, preferences=_Preferences(overlay=True), fail_foreground=True
    ).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]
    assert report.failed_steps == (BootStep.FOREGROUND,)
    assert report.main_launched is True


def test_scheduler_failure_does_not_stop_main_launch():
    calls = []
    report = _orchestrator(
        calls, preferences=_Preferences(auto_record=True), fail_scheduler=True
    ).run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]
    assert report.failed_steps == (BootStep.SCHEDULER,)


def test_every_launcher_failing_still_completes(caplog):
    calls = []
    orchestrator = _orchestrator(
        calls,
        remote_view=_RemoteView(True, True),
        fail_foreground=True,
        fail_scheduler=True,
        fail_main=True,
    )

    report = orchestrator.run_boot_sequence()

    assert _steps(calls) == ["foreground", "scheduler", "main"]
    assert report.final_state is BootState.DONE
    assert report.failed_steps == (
        BootStep.FOREGROUND,
        BootStep.SCHEDULER,
        BootStep.MAIN_SUBSYSTEM,
    )
    assert "Boot step failed: foreground keep-alive" in caplog.text
    assert "Boot step failed: main subsystem launch" in caplog.text


def test_on_boot_event_with_failing_launchers_returns_normally():
    calls = []
    orchestrator = _orchestrator(
        calls,
        preferences=_Preferences(overlay=True),
        fail_foreground=True,
        fail_scheduler=True,
        fail_main=True,
    )

    assert orchestrator.on_boot_event() is None
    assert _steps(calls) == ["foreground", "scheduler", "main"]


@pytest.mark.parametrize(
    "failing,expected",
    [
        # expected: (remote_view_requested, auto_record_requested, overlay_requested)
        ("is_remote_view_configured", (False, True, True)),
        ("is_remote_view_auto_start", (False, True, True)),
        ("is_auto_start_recording_enabled", (True, False, True)),
        ("is_floating_overlay_enabled", (True, True, False)),
    ],
)
def test_each_failed_config_read_only_disables_its_flag(failing, expected):
    calls = []
    report = _orchestrator(
        calls,
        remote_view=_RemoteView(True, True, failing=[failing]),
        preferences=_Preferences(auto_record=True, overlay=True, failing=[failing]),
    ).run_boot_sequence()

    decision = report.decision
    assert (
        decision.remote_view_requested,
        decision.auto_record_requested,
        decision.overlay_requested,
    ) == expected
    assert report.failed_steps == (BootStep.CONFIG,)
    assert report.final_state is BootState.DONE
    assert _steps(calls) == ["foreground", "scheduler", "main"]


def test_main_failure_is_reported():
    calls = []
    report = _orchestrator(
        calls, preferences=_Preferences(overlay=True), fail_main=True
    ).run_boot_sequence()

    assert report.main_launched is False
    assert report.failed_steps == (BootStep.MAIN_SUBSYSTEM,)


def test_repeated_boot_events_reissue_same_calls():
    calls = []
    orchestrator = _orchestrator(calls, preferences=_Preferences(auto_record=True))

    first = orchestrator.run_boot_sequence()
    first_calls = list(calls)
    calls.clear()
    second = orchestrator.run_boot_sequence()

    assert first.decision == second.decision
    assert calls == first_calls


def test_decision_follows_current_configuration():
    calls = []
    preferences = _Preferences()
    orchestrator = _orchestrator(calls, preferences=preferences)

    assert orchestrator.run_boot_sequence().main_launched is False
    preferences.overlay = True
    assert orchestrator.run_boot_sequence().main_launched is True


def test_slow_sequence_logs_budget_warning(caplog):
    ticks = iter([0.0, 2.5])
    calls = []
    report = _orchestrator(calls, time_budget=1.0, clock=lambda: next(ticks)).run_boot_sequence()

    assert report.elapsed == pytest.approx(2.5)
    assert "over the 1.000s budget" in caplog.text


def test_on_boot_event_never_raises(caplog):
    def broken_clock():
        raise RuntimeError("clock unavailable")

    calls = []
    _orchestrator(calls, clock=broken_clock).on_boot_event()

    assert "Boot sequence aborted unexpectedly" in caplog.text
