import logging

from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotFound
from rest_framework.response import Response
# rest_framework.views loads the authentication classes, which import this module
from rest_framework import views as drf_views


logger = logging.getLogger(__name__)


class EmailTaken(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "An account with this email already exists."
    default_code = "email_taken"


class InvalidCredentials(APIException):
    """ Wrong email or password; deliberately not an AuthenticationFailed so
        DRF doesn't downgrade it to 403 on views without authenticators
    """
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password."
    default_code = "invalid_credentials"


class InvalidToken(AuthenticationFailed):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid token."
    default_code = "token_not_valid"


class MovieNotFound(NotFound):
    default_detail = "Movie not found."
    default_code = "movie_not_found"


def api_exception_handler(exc, context):
    """ DRF exception handler that turns anything unexpected into a bare 500 """
    response = drf_views.exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "API view")
    drf_views.set_rollback()
    return Response(
        {"detail": "Internal server error."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
