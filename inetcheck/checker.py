from __future__ import annotations

import functools
import logging
from typing import Iterable, Optional, Tuple

from inetcheck.aggregator import connection_status, has_connection
from inetcheck.checks.http_check import HttpGet, probe, requests_get
from inetcheck.checks.results import ProbeResult
from inetcheck.models import ConnectionStatus, Target
from inetcheck.state import Listener, StatusTracker, Subscription

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 4.0
DEFAULT_INTERVAL_S = 5.0
DEFAULT_URIS = ("https://ya.ru", "https://google.com")


class InternetConnectionChecker:
    """
    Answers "is the internet reachable?" by racing HTTP probes against a set
    of well-known targets. One reachable target is enough.

    `on_status_change` subscribes to status changes; checks repeat every
    `check_interval` seconds only while someone is subscribed. Replacing
    `addresses` re-checks immediately for active subscribers.
    """

    def __init__(
        self,
        check_timeout: float = DEFAULT_TIMEOUT_S,
        check_interval: float = DEFAULT_INTERVAL_S,
        addresses: Optional[Iterable[Target]] = None,
        http_get: Optional[HttpGet] = None,
    ) -> None:
        self._check_timeout = check_timeout
        self._check_interval = check_interval
        self._http_get = http_get or requests_get
        if addresses is None:
            addresses = [Target(uri=u, timeout_s=check_timeout) for u in DEFAULT_URIS]
        self._addresses: Tuple[Target, ...] = tuple(addresses)
        self._tracker = StatusTracker(self.connection_status, check_interval)

    @property
    def check_timeout(self) -> float:
        return self._check_timeout

    @property
    def check_interval(self) -> float:
        return self._check_interval

    @property
    def addresses(self) -> Tuple[Target, ...]:
        return self._addresses

    @addresses.setter
    def addresses(self, value: Iterable[Target]) -> None:
        if value is None:
            raise TypeError("addresses must be a sequence of Target, not None")
        self._addresses = tuple(value)
        logger.info("targets replaced: %s", [str(t.uri) for t in self._addresses])
        self._tracker.refresh()

    def probe(self, target: Target) -> ProbeResult:
        return probe(target, http_get=self._http_get, default_timeout_s=self._check_timeout)

    def _deadline_s(self, targets: Tuple[Target, ...]) -> float:
        # a cycle lasts no longer than its slowest target's timeout
        return max(
            (t.timeout_s if t.timeout_s is not None else self._check_timeout for t in targets),
            default=self._check_timeout,
        )

    def has_connection(self) -> bool:
        # snapshot, so a concurrent reassignment cannot change targets mid-cycle
        targets = self._addresses
        return has_connection(targets, self.probe, self._deadline_s(targets))

    def connection_status(self) -> ConnectionStatus:
        targets = self._addresses
        return connection_status(targets, self.probe, self._deadline_s(targets))

    def on_status_change(self, listener: Listener) -> Subscription:
        return self._tracker.subscribe(listener)

    @property
    def last_status(self) -> Optional[ConnectionStatus]:
        return self._tracker.last_status

    @property
    def has_listeners(self) -> bool:
        return self._tracker.has_listeners

    @property
    def is_actively_checking(self) -> bool:
        return self._tracker.has_listeners

    def close(self) -> None:
        self._tracker.close()

    def __enter__(self) -> InternetConnectionChecker:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


@functools.lru_cache(maxsize=None)
def default_checker() -> InternetConnectionChecker:
    """Process-wide checker configured from the environment."""
    from inetcheck.runner import build_checker

    return build_checker()
