"""Main subsystem launcher (detached process, single instance).

The pid file is claimed with O_CREAT | O_EXCL before anything is spawned. An
existing pid file only blocks a launch while it names a live process whose
command line is ours; pids are reused across reboots.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from pathlib import Path

import psutil

from ..config import config
from ..core.config_model import LaunchContext

logger = logging.getLogger(__name__)

# An empty pid file younger than this belongs to a launch still in flight.
CLAIM_TIMEOUT = 10.0


class ProcessMainSubsystemLauncher:
    def __init__(self, command: str | list[str] | None = None, pid_file: Path | None = None):
        if command is None:
            command = config.MAIN_SUBSYSTEM_COMMAND
        self._command = shlex.split(command) if isinstance(command, str) else list(command)
        self._pid_file = pid_file or config.pid_file

    def launch(self, host, launch_context: LaunchContext) -> None:
        try:
            fd = self._claim()
        except OSError as exc:
            logger.error("Could not claim pid file %s; main subsystem not started: %s", self._pid_file, exc)
            return
        if fd is None:
            logger.info("Main subsystem already running (pid file %s)", self._pid_file)
            return

        args = self._command + launch_context.as_args()
        try:
            proc = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.error("Could not start main subsystem %s: %s", args[0], exc)
            os.close(fd)
            self._release()
            return

        try:
            os.write(fd, f"{proc.pid}\n".encode())
        except OSError as exc:
            logger.warning("Could not record main subsystem pid %d: %s", proc.pid, exc)
        finally:
            os.close(fd)
        logger.info("Main subsystem started (pid %d): %s", proc.pid, " ".join(args))

    def _claim(self) -> int | None:
        """Create the pid file exclusively; None if a live instance holds it."""
        self._pid_file.parent.mkdir(parents=True, exist_ok=True)
        for _ in range(2):
            try:
                return os.open(self._pid_file, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                if self._held():
                    return None
                logger.info("Removing stale pid file %s", self._pid_file)
                self._release()
        return None

    def _held(self) -> bool:
        try:
            content = self._pid_file.read_text(encoding="utf-8").strip()
            age = time.time() - self._pid_file.stat().st_mtime
        except FileNotFoundError:
            return False
        if not content:
            return age < CLAIM_TIMEOUT
        try:
            pid = int(content)
        except ValueError:
            return False
        return _is_our_process(pid, self._command)

    def _release(self) -> None:
        try:
            self._pid_file.unlink()
        except FileNotFoundError:
            pass


def _is_our_process(pid: int, command: list[str]) -> bool:
    try:
        cmdline = psutil.Process(pid).cmdline()
    except (psutil.NoSuchProcess, psutil.ZombieProcess, psutil.AccessDenied):
        return False
    return _command_matches(cmdline, command)


def _command_matches(cmdline: list[str], command: list[str]) -> bool:
    """True if `command` appears in `cmdline`, allowing an interpreter prefix
    and a resolved path for the executable."""
    if not command:
        return False
    head = os.path.basename(command[0])
    rest = command[1:]
    for i, arg in enumerate(cmdline):
        if os.path.basename(arg) == head and cmdline[i + 1 : i + 1 + len(rest)] == rest:
            return True
    return False
