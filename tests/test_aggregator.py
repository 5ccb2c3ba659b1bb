import threading
import time
import unittest
from unittest.mock import Mock

from inetcheck.aggregator import connection_status, has_connection
from inetcheck.checks.results import ProbeResult
from inetcheck.models import ConnectionStatus, Target

A = Target(uri="https://a.example/health")
B = Target(uri="https://b.example/health")
C = Target(uri="https://c.example/health")


def scripted_probe(plan: dict):
    """plan maps target uri -> (delay_s, success)."""

    def _probe(target: Target) -> ProbeResult:
        delay_s, success = plan[str(target.uri)]
        time.sleep(delay_s)
        return ProbeResult(target=target, success=success, latency_ms=int(delay_s * 1000))

    return _probe


class HasConnectionTests(unittest.TestCase):
    def test_empty_targets_is_false_without_probing(self) -> None:
        probe_fn = Mock()
        self.assertFalse(has_connection([], probe_fn))
        probe_fn.assert_not_called()

    def test_any_success_is_enough(self) -> None:
        plan = {
            str(A.uri): (0.0, False),
            str(B.uri): (0.01, True),
            str(C.uri): (0.02, False),
        }
        self.assertTrue(has_connection([A, B, C], scripted_probe(plan)))

    def test_all_failures_is_false(self) -> None:
        plan = {str(A.uri): (0.01, False), str(B.uri): (0.03, False)}
        self.assertFalse(has_connection([A, B], scripted_probe(plan)))

    def test_first_success_does_not_wait_for_slow_failure(self) -> None:
        plan = {str(A.uri): (0.05, True), str(B.uri): (0.6, False)}
        start = time.perf_counter()
        self.assertTrue(has_connection([A, B], scripted_probe(plan)))
        self.assertLess(time.perf_counter() - start, 0.4)

    def test_every_target_is_probed_concurrently(self) -> None:
        barrier = threading.Barrier(3, timeout=2)

        def _probe(target: Target) -> ProbeResult:
            barrier.wait()
            return ProbeResult(target=target, success=False, latency_ms=0)

        self.assertFalse(has_connection([A, B, C], _probe))

    def test_deadline_turns_slow_success_into_false(self) -> None:
        plan = {str(A.uri): (0.6, True), str(B.uri): (0.0, False)}
        start = time.perf_counter()
        self.assertFalse(has_connection([A, B], scripted_probe(plan), deadline_s=0.1))
        self.assertLess(time.perf_counter() - start, 0.4)

    def test_success_within_deadline(self) -> None:
        plan = {str(A.uri): (0.01, True), str(B.uri): (0.6, False)}
        self.assertTrue(has_connection([A, B], scripted_probe(plan), deadline_s=0.3))

    def test_connection_status_maps_bool(self) -> None:
        ok = scripted_probe({str(A.uri): (0, True)})
        bad = scripted_probe({str(A.uri): (0, False)})
        self.assertIs(connection_status([A], ok), ConnectionStatus.CONNECTED)
        self.assertIs(connection_status([A], bad), ConnectionStatus.DISCONNECTED)
        self.assertIs(connection_status([], ok), ConnectionStatus.DISCONNECTED)


if __name__ == "__main__":
    unittest.main()
