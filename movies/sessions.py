import logging

from django.contrib.auth import authenticate

from .exceptions import EmailTaken, InvalidCredentials
from .models import DuplicateEmail, User, normalize_email
from .tokens import issue_tokens


logger = logging.getLogger(__name__)


def signup(email, password):
    """ Register a new user and sign them in straight away """
    try:
        user = User.objects.create_user(email, password)
    except DuplicateEmail:
        logger.info("Signup refused, email already registered")
        raise EmailTaken()

    logger.info("User %s signed up", user.user_id)
    return user, issue_tokens(user)


def login(email, password, request=None):
    """ Verify credentials and issue a token
        An unknown email and a wrong password fail the same way
    """
    user = authenticate(request, email=normalize_email(email), password=password)
    if user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentials()

    return user, issue_tokens(user)
