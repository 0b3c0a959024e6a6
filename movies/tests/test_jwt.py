from datetime import timedelta

from django.test import TestCase
from rest_framework.test import APIClient
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken


User = get_user_model()


class TestJWT(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="test@email.com",
            password="pass"
        )

    def test_jwt_token_and_api_access(self):
        """ Integration test for testing JWT authentication including:
                1. Obtaining JWT token
                2. Accessing protected API
                3. Refreshing token
        """
        # 1. Get JWT token
        response = self.client.post("/auth/login", {"email": self.user.email, "password": "pass"})
        self.assertEqual(response.status_code, 200)
        tokens = response.json()
        self.assertIn("token", tokens)
        self.assertIn("refresh", tokens)

        access_token = tokens["token"]
        refresh_token = tokens["refresh"]

        # 2. Access protected API
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access_token}")
        response2 = self.client.get("/movies")
        self.assertEqual(response2.status_code, 200)

        # 3. Refresh token
        self.client.credentials()
        response3 = self.client.post("/auth/token/refresh/", {"refresh": refresh_token})
        self.assertEqual(response3.status_code, 200)
        self.assertIn("access", response3.json())

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response3.json()['access']}")
        self.assertEqual(self.client.get("/movies").status_code, 200)

    def test_token_carries_user_id_and_timestamps(self):
        response = self.client.post("/auth/login", {"email": self.user.email, "password": "pass"})
        token = AccessToken(response.json()["token"])

        self.assertEqual(token["user_id"], str(self.user.user_id))
        self.assertIn("iat", token.payload)
        self.assertIn("exp", token.payload)
        self.assertGreater(token["exp"], token["iat"])

    def test_missing_header_is_unauthenticated(self):
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 401)

    def test_bearer_without_token_is_unauthenticated(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 401)

    def test_garbage_token_is_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-jwt")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)

    def test_expired_token_is_rejected(self):
        token = AccessToken.for_user(self.user)
        token.set_exp(lifetime=-timedelta(minutes=1))

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)

    def test_forged_signature_is_rejected(self):
        header, payload, _ = str(AccessToken.for_user(self.user)).split(".")
        forged = f"{header}.{payload}.{'A' * 43}"

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {forged}")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)

    def test_refresh_token_is_not_an_access_token(self):
        refresh = RefreshToken.for_user(self.user)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh}")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)

    def test_token_of_deleted_user_is_rejected(self):
        token = str(AccessToken.for_user(self.user))
        self.user.delete()

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)

    def test_token_of_inactive_user_is_rejected(self):
        token = str(AccessToken.for_user(self.user))
        self.user.is_active = False
        self.user.save()

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        response = self.client.get("/movies")
        self.assertEqual(response.status_code, 403)
