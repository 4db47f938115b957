#!/usr/bin/env python3
"""
Tests for SourceClient
"""
import unittest
from datetime import timedelta
from unittest.mock import MagicMock

import requests

from termin_bot.config import RequestProfile, WatcherConfig
from termin_bot.errors import SourceError
from termin_bot.watcher.client import SourceClient, Timeslot


def make_response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error:
        response.raise_for_status.side_effect = status_error
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestSourceClient(unittest.TestCase):
    def setUp(self):
        self.config = WatcherConfig(
            channel_id=1,
            request_timeout=timedelta(seconds=5),
            profile=RequestProfile(user_agent="test-agent", referer=None, cookie=None),
        )
        self.session = MagicMock()
        self.session.headers = {}
        self.client = SourceClient(self.config, session=self.session)

    def test_url_template(self):
        self.assertEqual(
            self.client.url_for("0885"),
            "https://termine.fielmann.de/api/v3/times/001-0885/free/CL_CF/next",
        )

    def test_headers_installed_once(self):
        self.assertEqual(self.session.headers, {"User-Agent": "test-agent"})

    def test_default_profile_headers(self):
        headers = WatcherConfig(channel_id=1).profile.headers()
        self.assertIn("Firefox", headers["User-Agent"])
        self.assertEqual(headers["Referer"], "https://termine.fielmann.de/find-branch?service=CL_CF")
        self.assertIn("OptanonConsent", headers["Cookie"])
        self.assertEqual(headers["Accept-Encoding"], "gzip, deflate, br, zstd")

    def test_fetch_decodes_timeslots(self):
        self.session.get.return_value = make_response([
            {"date": "2024-09-01", "timeslots": {"from": "10:00", "to": "10:30"}},
            {"date": "2024-09-02", "timeslots": {"from": "11:00", "to": "11:30"}},
        ])
        timeslots = self.client.fetch("0885")
        self.assertEqual(timeslots, [
            Timeslot(date="2024-09-01", start="10:00", end="10:30"),
            Timeslot(date="2024-09-02", start="11:00", end="11:30"),
        ])
        self.session.get.assert_called_once_with(
            "https://termine.fielmann.de/api/v3/times/001-0885/free/CL_CF/next",
            timeout=5.0,
        )

    def test_empty_list_is_no_availability(self):
        self.session.get.return_value = make_response([])
        self.assertEqual(self.client.fetch("0103"), [])

    def test_transport_error(self):
        self.session.get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(SourceError) as ctx:
            self.client.fetch("0885")
        self.assertEqual(ctx.exception.store_code, "0885")

    def test_timeout(self):
        self.session.get.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(SourceError):
            self.client.fetch("0885")

    def test_non_2xx_status(self):
        self.session.get.return_value = make_response(
            status_error=requests.HTTPError("503 Server Error")
        )
        with self.assertRaises(SourceError):
            self.client.fetch("0885")

    def test_body_not_json(self):
        self.session.get.return_value = make_response(json_error=ValueError("Expecting value"))
        with self.assertRaises(SourceError):
            self.client.fetch("0885")

    def test_body_not_a_list(self):
        self.session.get.return_value = make_response({"error": "maintenance"})
        with self.assertRaises(SourceError):
            self.client.fetch("0885")

    def test_malformed_entry(self):
        self.session.get.return_value = make_response([{"date": "2024-09-01", "free": "3"}])
        with self.assertRaises(SourceError):
            self.client.fetch("0885")

    def test_close(self):
        self.client.close()
        self.session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
