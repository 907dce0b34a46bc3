"""Tests for MongoDB client caching and reconnection."""

import unittest
from unittest.mock import patch, MagicMock
from pymongo.errors import ConnectionFailure

from adapter.mongodb import connection


class TestGetMongodbClient(unittest.TestCase):

    def setUp(self):
        connection.reset_client()
        self.addCleanup(connection.reset_client)

    @patch.object(connection, 'MONGO_URL', None)
    @patch.object(connection, 'MongoClient')
    def test_missing_url_returns_none_without_connecting(self, mock_client_cls):
        self.assertIsNone(connection.get_mongodb_client())
        mock_client_cls.assert_not_called()

    @patch.object(connection, 'MONGO_URL', 'mongodb://db:27017')
    @patch.object(connection, 'MongoClient')
    def test_client_is_cached(self, mock_client_cls):
        client = mock_client_cls.return_value

        self.assertIs(connection.get_mongodb_client(), client)
        self.assertIs(connection.get_mongodb_client(), client)

        mock_client_cls.assert_called_once()
        self.assertEqual(mock_client_cls.call_args[0][0], 'mongodb://db:27017')

    @patch.object(connection, 'MONGO_URL', 'mongodb://db:27017')
    @patch.object(connection, 'MongoClient')
    def test_initial_failure_is_not_retried(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = ConnectionFailure("refused")

        self.assertIsNone(connection.get_mongodb_client())
        self.assertIsNone(connection.get_mongodb_client())

        mock_client_cls.assert_called_once()

    @patch.object(connection, 'MONGO_URL', 'mongodb://db:27017')
    @patch.object(connection, 'MongoClient')
    def test_dead_cached_client_is_replaced(self, mock_client_cls):
        first, second = MagicMock(), MagicMock()
        mock_client_cls.side_effect = [first, second]

        self.assertIs(connection.get_mongodb_client(), first)
        first.admin.command.side_effect = ConnectionFailure("gone")

        self.assertIs(connection.get_mongodb_client(), second)
        self.assertEqual(mock_client_cls.call_count, 2)

    @patch.object(connection, 'MONGO_URL', 'mongodb://db:27017')
    @patch.object(connection, 'MongoClient')
    def test_reset_client_allows_retry(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = [ConnectionFailure("refused"), {'ok': 1}]

        self.assertIsNone(connection.get_mongodb_client())
        connection.reset_client()

        self.assertIsNotNone(connection.get_mongodb_client())


if __name__ == '__main__':
    unittest.main()
