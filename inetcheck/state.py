from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable

from inetcheck.models import ConnectionStatus

logger = logging.getLogger(__name__)

Listener = Callable[[ConnectionStatus], None]


class TrackerState(Enum):
    IDLE = "idle"
    ACTIVE = "active"


class Subscription:
    def __init__(self, tracker: StatusTracker, listener: Listener) -> None:
        self._tracker = tracker
        self.listener = listener

    @property
    def active(self) -> bool:
        return self._tracker._is_subscribed(self)

    def cancel(self) -> None:
        self._tracker._unsubscribe(self)


class StatusTracker:
    """
    Tracks the last known connection status and re-checks it on a timer
    for as long as at least one listener is subscribed.

    IDLE -> ACTIVE on the first subscription, which runs a check right away.
    Each completed check emits only when the status differs from the last one,
    then schedules the next check `interval_s` after completion.
    ACTIVE -> IDLE when the last subscription is cancelled: the timer is
    cancelled and the last status is forgotten, so the next subscriber always
    gets an emission.
    """

    def __init__(
        self, check: Callable[[], ConnectionStatus], interval_s: float
    ) -> None:
        self._check = check
        self._interval_s = interval_s
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []
        self._last_status: ConnectionStatus | None = None
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._running = False
        self._rerun = False
        self._closed = False

    @property
    def state(self) -> TrackerState:
        with self._lock:
            return TrackerState.ACTIVE if self._subscriptions else TrackerState.IDLE

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    @property
    def has_listeners(self) -> bool:
        return self.listener_count > 0

    @property
    def last_status(self) -> ConnectionStatus | None:
        with self._lock:
            return self._last_status

    def subscribe(self, listener: Listener) -> Subscription:
        sub = Subscription(self, listener)
        with self._lock:
            if self._closed:
                raise RuntimeError("StatusTracker is closed")
            self._subscriptions.append(sub)
            if len(self._subscriptions) == 1:
                logger.debug("first listener attached, starting checks")
                self._request_check_locked()
        return sub

    def refresh(self) -> None:
        """Re-check now if anyone is listening; the pending timer is dropped."""
        with self._lock:
            if self._subscriptions and not self._closed:
                self._request_check_locked()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._subscriptions.clear()
            self._cancel_timer_locked()
            self._last_status = None
            self._rerun = False

    def _is_subscribed(self, sub: Subscription) -> bool:
        with self._lock:
            return sub in self._subscriptions

    def _unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub not in self._subscriptions:
                return
            self._subscriptions.remove(sub)
            if not self._subscriptions:
                logger.debug("last listener detached, stopping checks")
                self._cancel_timer_locked()
                self._last_status = None
                self._rerun = False

    def _cancel_timer_locked(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _schedule_locked(self, delay_s: float) -> None:
        if self._closed:
            raise RuntimeError("cannot schedule a check on a closed StatusTracker")
        self._cancel_timer_locked()
        t = threading.Timer(delay_s, self._run_cycle, args=(self._generation,))
        t.daemon = True
        self._timer = t
        t.start()

    def _request_check_locked(self) -> None:
        if self._running:
            # one cycle at a time; run again as soon as the current one ends
            self._cancel_timer_locked()
            self._rerun = True
        else:
            self._schedule_locked(0)

    def _run_cycle(self, generation: int) -> None:
        with self._lock:
            # a cancelled timer may already be past its wait
            if generation != self._generation or self._running or not self._subscriptions:
                return
            self._running = True
            self._timer = None

        status: ConnectionStatus | None
        try:
            status = self._check()
        except Exception:
            logger.exception("connection check failed")
            status = None

        subs: list[Subscription] = []
        with self._lock:
            if status is not None and self._subscriptions:
                if status != self._last_status:
                    logger.info("connection status: %s -> %s", self._last_status, status)
                    subs = list(self._subscriptions)
                self._last_status = status

        for sub in subs:
            # an earlier listener may have cancelled this one
            if not sub.active:
                continue
            try:
                sub.listener(status)
            except Exception:
                logger.exception("status listener raised")

        with self._lock:
            self._running = False
            if not self._subscriptions or self._closed:
                self._rerun = False
                return
            if self._rerun:
                self._rerun = False
                self._schedule_locked(0)
            else:
                self._schedule_locked(self._interval_s)
