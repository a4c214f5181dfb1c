"""Periodic keep-alive scheduling.

Work is registered under a unique name in a process-wide registry. An alive
registration is kept as-is; a cancelled or dead one is replaced.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..config import config
from .foreground import _has_cmd, _spawn

logger = logging.getLogger(__name__)

KEEPALIVE_WORK_NAME = "camboot-keepalive"

# Seconds; shorter intervals are raised to this.
MIN_INTERVAL = 1.0

_registry: dict[str, "_PeriodicWork"] = {}
_registry_lock = threading.Lock()


class _PeriodicWork:
    def __init__(self, name: str, task: Callable[[], None], interval: float):
        self.name = name
        self._task = task
        self._interval = interval
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stop.set()

    def _loop(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._task()
            except Exception:
                logger.exception("Periodic work %s failed; will retry next interval", self.name)


class PeriodicKeepAliveScheduler:
    def __init__(
        self,
        task: Callable[[], None],
        interval: float | None = None,
        name: str = KEEPALIVE_WORK_NAME,
    ):
        self._task = task
        if interval is None:
            interval = config.KEEPALIVE_INTERVAL_MINUTES * 60
        self._interval = max(interval, MIN_INTERVAL)
        self._name = name

    def ensure_scheduled(self, host) -> None:
        with _registry_lock:
            existing = _registry.get(self._name)
            if existing is not None and existing.alive:
                logger.debug("Periodic work %s already scheduled", self._name)
                return
            work = _PeriodicWork(self._name, self._task, self._interval)
            work.start()
            _registry[self._name] = work
        logger.info("Periodic work %s scheduled every %.0fs", self._name, self._interval)

    def is_scheduled(self) -> bool:
        with _registry_lock:
            work = _registry.get(self._name)
            return work is not None and work.alive

    def cancel(self) -> None:
        with _registry_lock:
            work = _registry.pop(self._name, None)
        if work is not None:
            work.cancel()


class KeepAliveCheck:
    """Periodic task: re-assert the foreground keep-alive service."""

    def __init__(self, foreground, host=None, title: str | None = None, message: str | None = None):
        self._foreground = foreground
        self._host = host
        self._title = title or config.FOREGROUND_TITLE
        self._message = message or config.FOREGROUND_MESSAGE

    def __call__(self) -> None:
        logger.debug("Keep-alive check")
        self._foreground.start(self._host, self._title, self._message)


class SystemdTimerScheduler:
    """Periodic keep-alive backed by a systemd user timer.

    Used when the boot hook runs as a short-lived process; starting an active
    timer is a no-op.
    """

    def __init__(self, timer: str = KEEPALIVE_WORK_NAME + ".timer"):
        self._timer = timer

    def ensure_scheduled(self, host) -> None:
        if not _has_cmd("systemctl"):
            logger.warning("systemctl not found; keep-alive timer %s not scheduled", self._timer)
            return
        _spawn(["systemctl", "--user", "start", "--no-block", self._timer])
