from django.test import TestCase
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import AccessToken

from movies.tokens import TokenCheck, issue_tokens, verify_token


User = get_user_model()


class TestTokens(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="a@x.com", password="secret1")

    def test_issued_token_verifies_to_its_user(self):
        tokens = issue_tokens(self.user)

        check = verify_token(tokens["token"])
        self.assertTrue(check.ok)
        self.assertEqual(check.user_id, str(self.user.user_id))

    def test_bytes_tokens_are_accepted(self):
        token = str(AccessToken.for_user(self.user)).encode()
        self.assertTrue(verify_token(token).ok)

    def test_invalid_token_gives_a_reason(self):
        check = verify_token("definitely.not.valid")
        self.assertFalse(check.ok)
        self.assertIsNone(check.user_id)
        self.assertTrue(check.reason)

    def test_refresh_token_is_refused(self):
        check = verify_token(issue_tokens(self.user)["refresh"])
        self.assertFalse(check.ok)

    def test_token_check_ok(self):
        self.assertTrue(TokenCheck(user_id="42").ok)
        self.assertFalse(TokenCheck(reason="expired").ok)
