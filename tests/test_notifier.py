import unittest
from unittest.mock import Mock, patch

import requests

from inetcheck.formatting import format_status_change
from inetcheck.models import ConnectionStatus, Target
from inetcheck.notifier import NtfyConfig, NtfyNotifier, notification_listener


class FormattingTests(unittest.TestCase):
    def test_format_lists_targets(self) -> None:
        title, message = format_status_change(
            ConnectionStatus.DISCONNECTED,
            [Target(uri="https://a.example/")],
            "2026-01-01T00:00:00+00:00",
        )
        self.assertEqual(title, "[DOWN] internet disconnected")
        self.assertIn("Targets: https://a.example/", message)
        self.assertIn("Time: 2026-01-01T00:00:00+00:00", message)

    def test_format_without_targets(self) -> None:
        title, message = format_status_change(ConnectionStatus.CONNECTED, [], "now")
        self.assertEqual(title, "[UP] internet connected")
        self.assertIn("(none configured)", message)


class NtfyNotifierTests(unittest.TestCase):
    def test_posts_to_topic_with_priority(self) -> None:
        notifier = NtfyNotifier(NtfyConfig(base_url="https://ntfy.example/", topic="net"))
        with patch("inetcheck.notifier.requests.post", return_value=Mock()) as mock_post:
            notifier.send_disconnected(title="t", message="body")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://ntfy.example/net")
        self.assertEqual(kwargs["data"], b"body")
        self.assertEqual(kwargs["headers"]["Priority"], "4")
        self.assertEqual(kwargs["headers"]["Title"], "t")

    def test_listener_routes_by_status(self) -> None:
        notifier = Mock()
        checker = Mock(addresses=(Target(uri="https://a.example/"),))
        listener = notification_listener(notifier, checker)

        listener(ConnectionStatus.DISCONNECTED)
        listener(ConnectionStatus.CONNECTED)

        notifier.send_disconnected.assert_called_once()
        notifier.send_connected.assert_called_once()
        self.assertIn("https://a.example/", notifier.send_connected.call_args.kwargs["message"])

    def test_listener_logs_and_swallows_notify_errors(self) -> None:
        notifier = Mock()
        notifier.send_connected.side_effect = requests.ConnectionError("ntfy down")
        listener = notification_listener(notifier)

        with self.assertLogs("inetcheck.notifier", level="WARNING"):
            listener(ConnectionStatus.CONNECTED)


if __name__ == "__main__":
    unittest.main()
