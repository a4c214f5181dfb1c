"""Launch policy: maps the four boot-relevant preferences to a BootDecision."""

from __future__ import annotations

from .config_model import BootDecision


def evaluate(
    remote_view_configured: bool,
    remote_view_auto_start: bool,
    auto_record: bool,
    overlay_enabled: bool,
) -> BootDecision:
    """Compute the boot decision. Pure and total."""
    return BootDecision(
        remote_view_requested=bool(remote_view_configured and remote_view_auto_start),
        auto_record_requested=bool(auto_record),
        overlay_requested=bool(overlay_enabled),
    )
