"""camboot - Boot-time orchestration for a device-resident camera monitor"""

__version__ = "1.0.0"
__description__ = "Boot-time orchestration for a device-resident camera monitor"

__all__ = ["BootOrchestrator", "__version__"]


def __getattr__(name: str):
    """Lazy import so that importing camboot.config does not pull in the core."""
    if name == "BootOrchestrator":
        from .core.orchestrator import BootOrchestrator

        return BootOrchestrator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
