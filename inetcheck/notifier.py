from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import requests

from inetcheck.formatting import format_status_change
from inetcheck.models import ConnectionStatus
from inetcheck.state import Listener

if TYPE_CHECKING:
    from inetcheck.checker import InternetConnectionChecker

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class NtfyConfig:
    base_url: str
    topic: str
    priority_down: int = 4
    priority_up: int = 2
    timeout_s: float = 5


class NtfyNotifier:
    def __init__(self, cfg: NtfyConfig) -> None:
        self.cfg = cfg

    def _post(
        self, title: str, message: str, priority: int, tags: Optional[str] = None
    ) -> None:
        url = f"{self.cfg.base_url.rstrip('/')}/{self.cfg.topic}"
        headers = {
            "Title": title,
            "Priority": str(priority),
        }
        if tags:
            headers["Tags"] = tags  # comma-separated emoji or tag words
        resp = requests.post(
            url, data=message.encode("utf-8"), headers=headers, timeout=self.cfg.timeout_s
        )
        resp.raise_for_status()

    def send_disconnected(self, title: str, message: str) -> None:
        self._post(
            title, message, priority=self.cfg.priority_down, tags="rotating_light,down"
        )

    def send_connected(self, title: str, message: str) -> None:
        self._post(
            title, message, priority=self.cfg.priority_up, tags="white_check_mark,up"
        )


def notification_listener(
    notifier: NtfyNotifier, checker: InternetConnectionChecker | None = None
) -> Listener:
    """Adapt a notifier to a status listener. `checker` supplies the current targets."""

    def _notify(status: ConnectionStatus) -> None:
        targets = checker.addresses if checker is not None else ()
        title, message = format_status_change(status, targets, now_iso())
        try:
            if status is ConnectionStatus.DISCONNECTED:
                notifier.send_disconnected(title=title, message=message)
            else:
                notifier.send_connected(title=title, message=message)
        except requests.RequestException as e:
            # Notification errors should never stop the check loop.
            logger.warning("ntfy notification failed: %s", e)

    return _notify
