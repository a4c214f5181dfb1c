"""Platform detection for camboot adapters"""

import platform
import shutil

HAS_SYSTEMCTL = shutil.which("systemctl") is not None
HAS_NOTIFY_SEND = shutil.which("notify-send") is not None


def get_platform_info() -> dict:
    """Get platform details for the boot log."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
        "python_version": platform.python_version(),
        "has_systemctl": HAS_SYSTEMCTL,
        "has_notify_send": HAS_NOTIFY_SEND,
    }
