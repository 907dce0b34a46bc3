"""Unit tests for structured JSON logging."""

import json
import logging
import sys
import unittest

from utils.logging import JSONFormatter, setup_structured_logging


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name='services.user_service', level=logging.INFO, pathname=__file__,
            lineno=1, msg='User %s', args=('created',), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_formats_standard_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'services.user_service')
        self.assertEqual(data['message'], 'User created')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_includes_extra_fields(self):
        data = json.loads(JSONFormatter().format(self._record(userId=7, loginName='alice')))

        self.assertEqual(data['userId'], 7)
        self.assertEqual(data['loginName'], 'alice')
        self.assertNotIn('lineno', data)

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record()
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        self.assertIn('ValueError: boom', data['exception'])


class TestSetupStructuredLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, root.handlers[:])

    def tearDown(self):
        root = logging.getLogger()
        root.setLevel(self._saved[0])
        root.handlers = self._saved[1]

    def test_installs_json_handler(self):
        setup_structured_logging('debug')

        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JSONFormatter)
        self.assertEqual(logging.getLogger('uvicorn.access').level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
