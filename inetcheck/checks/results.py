from __future__ import annotations

from dataclasses import dataclass

from inetcheck.models import Target


@dataclass
class ProbeResult:
    target: Target
    success: bool
    latency_ms: int
    status_code: int | None = None
    error: str | None = None
