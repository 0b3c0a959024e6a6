from dataclasses import dataclass
from typing import Optional

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken


@dataclass(frozen=True)
class TokenCheck:
    """ Outcome of verifying a bearer token: a user id, or the reason it was refused """
    user_id: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self):
        return self.reason is None


def issue_tokens(user):
    """ Sign a fresh access token (and the refresh token it derives from) for a user
        Each token carries its own jti, so two logins never produce the same string
    """
    refresh = RefreshToken.for_user(user)
    return {
        "token": str(refresh.access_token),
        "refresh": str(refresh),
    }


def verify_token(raw_token):
    """ Check signature, token type and expiry of an access token """
    if isinstance(raw_token, bytes):
        raw_token = raw_token.decode("utf-8", errors="replace")

    try:
        token = AccessToken(raw_token)
    except TokenError as exc:
        return TokenCheck(reason=str(exc))

    user_id = token.get(api_settings.USER_ID_CLAIM)
    if not user_id:
        return TokenCheck(reason="Token contained no recognizable user identification")
    return TokenCheck(user_id=str(user_id))
