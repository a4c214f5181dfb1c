#!/usr/bin/env python3
"""camboot: run the boot sequence for the camera monitor"""

import logging
import sys

from .adapters.config_env import EnvLocalPreferences, EnvRemoteViewConfig
from .adapters.foreground import SystemdForegroundLauncher
from .adapters.main_subsystem import ProcessMainSubsystemLauncher
from .adapters.scheduler import SystemdTimerScheduler
from .config import config
from .core.orchestrator import BootOrchestrator
from .core.receiver import ACTION_PROCESS_RESTARTED, BootEventReceiver
from .platform_utils import get_platform_info


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_orchestrator(host=None) -> BootOrchestrator:
    """Wire the orchestrator to the env config and the systemd launchers."""
    return BootOrchestrator(
        host=host,
        remote_view=EnvRemoteViewConfig(),
        preferences=EnvLocalPreferences(),
        foreground=SystemdForegroundLauncher(),
        scheduler=SystemdTimerScheduler(),
        main_launcher=ProcessMainSubsystemLauncher(),
        foreground_title=config.FOREGROUND_TITLE,
        foreground_message=config.FOREGROUND_MESSAGE,
        time_budget=config.BOOT_TIME_BUDGET,
    )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    action = argv[0] if argv else ACTION_PROCESS_RESTARTED

    configure_logging()
    logging.getLogger(__name__).debug("Platform: %s", get_platform_info())

    receiver = BootEventReceiver(build_orchestrator())
    receiver.on_receive(action)
    return 0


if __name__ == "__main__":
    sys.exit(main())
