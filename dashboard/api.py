"""HTTP client the dashboard uses to talk to the Cinemate API."""
import logging
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings


logger = logging.getLogger(__name__)

# Shared by every client that is not handed a session of its own
_shared_session = requests.Session()


class ApiError(Exception):
    """ Any non-2xx answer (or no answer at all) from the API """

    def __init__(self, status_code: Optional[int], payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"API request failed ({status_code}): {payload}")

    @property
    def detail(self) -> str:
        """ Best human-readable message from a DRF error body """
        if isinstance(self.payload, dict):
            if "detail" in self.payload:
                return str(self.payload["detail"])
            for field, messages in self.payload.items():
                if isinstance(messages, list) and messages:
                    return f"{field}: {messages[0]}"
        return ""


class AuthenticationLost(ApiError):
    """ 401/403 on an authenticated call: the stored token is no good any more """


class CinemateClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.CINEMATE_API_URL).rstrip("/")
        self.token = token
        self.session = session or _shared_session
        self.timeout = timeout or settings.CINEMATE_API_TIMEOUT

    def _request(self, method: str, path: str, payload: Optional[dict] = None, authenticated: bool = True) -> Any:
        headers = {"Accept": "application/json"}
        if authenticated and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(None, str(e)) from e

        body = self._body(r)
        if authenticated and r.status_code in (401, 403):
            raise AuthenticationLost(r.status_code, body)
        if not r.ok:
            logger.info("%s %s -> %s", method, url, r.status_code)
            raise ApiError(r.status_code, body)
        return body

    @staticmethod
    def _body(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError:
            return None

    # --- session issuer ---

    def signup(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/signup", {"email": email, "password": password}, authenticated=False)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", {"email": email, "password": password}, authenticated=False)

    # --- movies ---

    def list_movies(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/movies")

    def create_movie(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/movies", fields)

    def update_movie(self, movie_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/movies/{movie_id}", fields)

    def delete_movie(self, movie_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/movies/{movie_id}")
