"""Boot signal filter in front of the orchestrator."""

from __future__ import annotations

import logging

from .orchestrator import BootOrchestrator

logger = logging.getLogger(__name__)

ACTION_BOOT_COMPLETED = "android.intent.action.BOOT_COMPLETED"
ACTION_QUICKBOOT_POWERON = "android.intent.action.QUICKBOOT_POWERON"
ACTION_PROCESS_RESTARTED = "camboot.action.PROCESS_RESTARTED"

BOOT_ACTIONS = frozenset(
    {ACTION_BOOT_COMPLETED, ACTION_QUICKBOOT_POWERON, ACTION_PROCESS_RESTARTED}
)


class BootEventReceiver:
    def __init__(self, orchestrator: BootOrchestrator):
        self._orchestrator = orchestrator

    def on_receive(self, action: str | None) -> bool:
        """Dispatch a host signal; returns True if it started a boot sequence."""
        if not action or action not in BOOT_ACTIONS:
            logger.debug("Ignoring signal: %r", action)
            return False
        logger.info("Boot signal: %s", action)
        self._orchestrator.on_boot_event()
        return True
