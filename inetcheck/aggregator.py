from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, Optional, Sequence

from inetcheck.checks.results import ProbeResult
from inetcheck.models import ConnectionStatus, Target

logger = logging.getLogger(__name__)

ProbeFn = Callable[[Target], ProbeResult]


def has_connection(
    targets: Sequence[Target], probe_fn: ProbeFn, deadline_s: Optional[float] = None
) -> bool:
    """
    Probe every target concurrently and return True on the first success.
    Returns False once every probe has failed, when `deadline_s` elapses
    first, or right away when there is nothing to probe. Probes still running
    at that point are left to finish in the background; their results are
    ignored.
    """
    if not targets:
        return False

    pool = ThreadPoolExecutor(
        max_workers=len(targets), thread_name_prefix="inetcheck-probe"
    )
    try:
        futures = [pool.submit(probe_fn, t) for t in targets]
        for fut in as_completed(futures, timeout=deadline_s):
            res = fut.result()
            if res.success:
                logger.debug("reachable: %s", res.target.uri)
                return True
        return False
    except FuturesTimeout:
        logger.debug("no target reachable within %ss", deadline_s)
        return False
    finally:
        pool.shutdown(wait=False)


def connection_status(
    targets: Sequence[Target], probe_fn: ProbeFn, deadline_s: Optional[float] = None
) -> ConnectionStatus:
    if has_connection(targets, probe_fn, deadline_s):
        return ConnectionStatus.CONNECTED
    return ConnectionStatus.DISCONNECTED
