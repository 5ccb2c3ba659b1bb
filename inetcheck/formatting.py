from __future__ import annotations

from typing import Sequence

from inetcheck.models import ConnectionStatus, Target


def format_status_change(
    status: ConnectionStatus, targets: Sequence[Target], ts: str
) -> tuple[str, str]:
    label = "UP" if status is ConnectionStatus.CONNECTED else "DOWN"
    title = f"[{label}] internet {status.value}"

    lines = [f"Status: {status.value}"]
    if targets:
        lines.append("Targets: " + ", ".join(str(t.uri) for t in targets))
    else:
        lines.append("Targets: (none configured)")
    lines.append(f"Time: {ts}")
    return title, "\n".join(lines)
