from unittest.mock import patch

from django.db import OperationalError
from django.test import TestCase
from rest_framework.test import APIClient


class TestHealth(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_health_needs_no_token(self):
        response = self.client.get("/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_database_down(self):
        with self.assertLogs("movies.views", level="ERROR"):
            with patch("movies.views.connection") as connection:
                connection.ensure_connection.side_effect = OperationalError("down")
                response = self.client.get("/health/")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json(), {"status": "unavailable"})
