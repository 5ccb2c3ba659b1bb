from __future__ import annotations

import logging
import threading

from inetcheck.checker import InternetConnectionChecker
from inetcheck.config import settings
from inetcheck.models import ConnectionStatus
from inetcheck.notifier import NtfyConfig, NtfyNotifier, notification_listener
from inetcheck.registry import load_targets

logger = logging.getLogger(__name__)


def build_notifier() -> NtfyNotifier | None:
    if not settings.NTFY_URL or not settings.NTFY_TOPIC:
        return None
    return NtfyNotifier(NtfyConfig(base_url=settings.NTFY_URL, topic=settings.NTFY_TOPIC))


def build_checker() -> InternetConnectionChecker:
    addresses = None
    if settings.INETCHECK_TARGETS_PATH:
        addresses = load_targets(settings.INETCHECK_TARGETS_PATH)
    return InternetConnectionChecker(
        check_timeout=settings.INETCHECK_TIMEOUT_SECONDS,
        check_interval=settings.INETCHECK_INTERVAL_SECONDS,
        addresses=addresses,
    )


def _log_status(status: ConnectionStatus) -> None:
    logger.info("internet %s", status.value)


def watch(
    checker: InternetConnectionChecker,
    stop: threading.Event,
    notifier: NtfyNotifier | None = None,
) -> None:
    """Block until `stop` is set, logging (and optionally notifying) every status change."""
    subs = [checker.on_status_change(_log_status)]
    if notifier is not None:
        subs.append(checker.on_status_change(notification_listener(notifier, checker)))
    try:
        stop.wait()
    finally:
        for sub in subs:
            sub.cancel()
