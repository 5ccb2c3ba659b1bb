from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeout
from typing import Callable, Mapping

import requests

from inetcheck.checks.results import ProbeResult
from inetcheck.models import Target

logger = logging.getLogger(__name__)

# (uri, headers, timeout_s) -> HTTP status code; raises on transport failure.
HttpGet = Callable[[str, Mapping[str, str], float], int]


def requests_get(uri: str, headers: Mapping[str, str], timeout_s: float) -> int:
    r = requests.get(uri, headers=dict(headers), timeout=timeout_s)
    return r.status_code


def probe(
    target: Target,
    *,
    http_get: HttpGet = requests_get,
    default_timeout_s: float = 4.0,
) -> ProbeResult:
    """
    One GET against `target`. Only HTTP 200 received within the timeout is a
    success. requests' timeout bounds each connect/read step, not the whole
    exchange, so the call runs on its own thread and is abandoned once the
    timeout elapses.
    """
    timeout_s = target.timeout_s if target.timeout_s is not None else default_timeout_s
    uri = str(target.uri)
    start = time.perf_counter()
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="inetcheck-get")
    try:
        fut = pool.submit(http_get, uri, target.headers, timeout_s)
        status_code = fut.result(timeout=timeout_s)
        elapsed_s = time.perf_counter() - start
        latency_ms = int(elapsed_s * 1000)
        logger.debug("probe %s -> HTTP %s in %sms", uri, status_code, latency_ms)
        return ProbeResult(
            target=target,
            success=status_code == 200 and elapsed_s <= timeout_s,
            latency_ms=latency_ms,
            status_code=status_code,
        )
    except FuturesTimeout:
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("probe %s timed out after %ss", uri, timeout_s)
        return ProbeResult(
            target=target,
            success=False,
            latency_ms=latency_ms,
            error=f"timed out after {timeout_s}s",
        )
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("probe %s failed in %sms: %s", uri, latency_ms, e)
        return ProbeResult(target=target, success=False, latency_ms=latency_ms, error=str(e))
    finally:
        pool.shutdown(wait=False)
