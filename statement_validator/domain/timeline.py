"""Stage timeline event helpers for pipeline diagnostics."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    started_monotonic: float | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured stage event.

    Args:
        stage: Stage name, e.g. `parse` or `structural`.
        status: Stage status marker (`completed`, `failed`, `skipped`).
        started_monotonic: Optional `time.monotonic()` value taken when the stage started.
        details: Optional structured details object.

    Returns:
        dict[str, object]: JSON-compatible stage event.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if started_monotonic is not None:
        event_payload["duration_ms"] = int((time.monotonic() - started_monotonic) * 1000)
    if details is not None:
        event_payload["details"] = details
    return event_payload
