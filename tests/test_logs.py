"""Tests for logging setup and the HTTP access log middleware."""

import logging
import time
import unittest

from fastapi.testclient import TestClient

from acquisitions.core.logs import LOG_DATEFMT, LOG_FORMAT
from acquisitions.main import app


class TestLogFormat(unittest.TestCase):
    def test_timestamp_is_local_time_without_zone_suffix(self) -> None:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
        record = logging.makeLogRecord({"name": "acquisitions", "levelname": "INFO", "msg": "hi"})
        stamp = formatter.formatTime(record, LOG_DATEFMT)
        self.assertFalse(stamp.endswith("Z"))
        self.assertEqual(stamp, time.strftime(LOG_DATEFMT, time.localtime(record.created)))


class TestAccessLog(unittest.TestCase):
    def test_request_is_logged_with_status(self) -> None:
        with TestClient(app) as client, self.assertLogs("acquisitions.access", level="INFO") as logs:
            client.get("/api")
        self.assertEqual(len(logs.records), 1)
        record = logs.records[0]
        self.assertEqual(record.method, "GET")
        self.assertEqual(record.path, "/api")
        self.assertEqual(record.status_code, 200)
        self.assertIn("GET /api 200", record.getMessage())


if __name__ == "__main__":
    unittest.main()
