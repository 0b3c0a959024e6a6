import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.settings import api_settings

from .exceptions import InvalidToken
from .tokens import verify_token


logger = logging.getLogger(__name__)


class BearerTokenAuthentication(JWTAuthentication):
    """ Reads `Authorization: Bearer <token>` before any movie handler runs

        - no header or no token: returns None / 401, DRF answers NotAuthenticated
        - bad signature, wrong type, expired or unknown user: InvalidToken (403)

        The user id only ever comes from the verified token, never from the body.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        check = verify_token(raw_token)
        if not check.ok:
            logger.info("Rejected token: %s", check.reason)
            raise InvalidToken()

        return self.get_active_user(check.user_id), check

    def get_active_user(self, user_id):
        User = get_user_model()
        try:
            user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except (User.DoesNotExist, ValidationError, ValueError):
            logger.info("Token for unknown user %s", user_id)
            raise InvalidToken()

        if not user.is_active:
            raise InvalidToken()
        return user
