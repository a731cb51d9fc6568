import unittest

from loguru import logger

from framer_export.exporter.infrastructure.event_tracker import LoguruEventTracker


class LoguruEventTrackerTests(unittest.TestCase):
    def setUp(self):
        self.records = []
        self.handler_id = logger.add(lambda message: self.records.append(message.record), level="DEBUG")

    def tearDown(self):
        logger.remove(self.handler_id)

    def test_track_emits_structured_record(self):
        LoguruEventTracker().track("page_exported", {"url": "https://example.com/", "filename": "index.html"})

        self.assertEqual(len(self.records), 1)
        record = self.records[0]
        self.assertEqual(record["level"].name, "INFO")
        self.assertEqual(record["extra"]["event"], "page_exported")
        self.assertEqual(record["extra"]["event_data"]["filename"], "index.html")
        self.assertIn("page_exported", record["message"])

    def test_level_is_configurable(self):
        LoguruEventTracker(level="DEBUG").track("export_started", {"origin": "https://example.com"})

        self.assertEqual(self.records[0]["level"].name, "DEBUG")
