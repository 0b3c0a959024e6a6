from datetime import datetime
import logging
import time


# Request log, routed to the file handler configured in settings.LOGGING
logger = logging.getLogger(__name__)


class RequestLogMiddleware:
    """A middleware that logs each request to the request log, including:
        - The timestamp
        - The user (once the API has authenticated the bearer token)
        - The client IP
        - The method, path, response status and duration
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        # DRF copies the token's user onto the underlying request after authenticating
        user = getattr(request, 'user', None)
        user = user if user is not None and user.is_authenticated else 'Anonymous'

        logger.info(
            f"{datetime.now()} - User: {user} - IP: {self.get_client_ip(request)} - "
            f"{request.method} {request.path} - {response.status_code} - {elapsed_ms:.0f}ms"
        )
        return response

    def get_client_ip(self, request):
        """ Retrieve the client's IP address from the request """
        # Check for X-Forwarded-For header first (in case of proxy in production)
        # x_forwarded_for will look like: "client_ip, proxy1_ip, proxy2_ip"
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')

        if x_forwarded_for:  # In production, behind a proxy
            ip = x_forwarded_for.split(',')[0].strip()
        else:  # Direct request in local development
            ip = request.META.get('REMOTE_ADDR')
        return ip
