from django.test import TestCase
from rest_framework.test import APIClient
from django.contrib.auth import get_user_model

from movies.tokens import issue_tokens


User = get_user_model()


class TestRequestLog(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_anonymous_request_is_logged(self):
        with self.assertLogs("security.middleware", level="INFO") as logs:
            self.client.get("/movies", REMOTE_ADDR="10.0.0.7")

        line = logs.output[0]
        self.assertIn("User: Anonymous", line)
        self.assertIn("IP: 10.0.0.7", line)
        self.assertIn("GET /movies - 401", line)

    def test_token_user_is_logged(self):
        user = User.objects.create_user(email="a@x.com", password="secret1")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_tokens(user)['token']}")

        with self.assertLogs("security.middleware", level="INFO") as logs:
            self.client.get("/movies")

        self.assertIn("User: a@x.com", logs.output[0])
        self.assertIn("- 200 -", logs.output[0])

    def test_forwarded_ip_wins(self):
        with self.assertLogs("security.middleware", level="INFO") as logs:
            self.client.get("/health/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1")

        self.assertIn("IP: 203.0.113.9", logs.output[0])
