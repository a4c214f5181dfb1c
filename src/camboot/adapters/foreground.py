"""Foreground keep-alive adapter (systemd user unit + persistent notification)."""

from __future__ import annotations

import logging
import shutil
import subprocess

from ..config import config

logger = logging.getLogger(__name__)

# Repeated starts replace one notification instead of stacking new ones.
NOTIFICATION_TAG = "camboot-keepalive"


class SystemdForegroundLauncher:
    """Starts the keep-alive unit and posts a low-urgency notification.

    `systemctl start` on an active unit is a no-op, so repeated boot events do
    not duplicate the service. Nothing here waits for the unit to come up.
    """

    def __init__(self, unit: str | None = None, notify: bool = True):
        self._unit = unit or config.FOREGROUND_UNIT
        self._notify = notify

    def start(self, host, title: str, message: str) -> None:
        if _has_cmd("systemctl"):
            _spawn(["systemctl", "--user", "start", "--no-block", self._unit])
        else:
            logger.warning("systemctl not found; keep-alive unit %s not started", self._unit)

        if self._notify and _has_cmd("notify-send"):
            _spawn(
                [
                    "notify-send",
                    "--urgency=low",
                    "--app-name=camboot",
                    f"--hint=string:x-canonical-private-synchronous:{NOTIFICATION_TAG}",
                    title,
                    message,
                ]
            )


def _has_cmd(name: str) -> bool:
    return shutil.which(name) is not None


def _spawn(args: list[str]) -> bool:
    try:
        subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        logger.warning("Could not run %s: %s", args[0], exc)
        return False
    return True
