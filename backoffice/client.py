import logging
from typing import Optional

import requests

logger = logging.getLogger("backoffice.client")


class ApiError(Exception):
    """Raised for every failed call to the site API, transport errors included (status_code is None)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class ApiClient:
    """
    Thin wrapper over a requests session talking to the site API.

    Every call returns the `data` member of the response envelope, failures raise ApiError.
    """

    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        if token:
            self.authenticate(token)

    def authenticate(self, token: str):
        self.session.headers.update({"Authorization": f"Bearer {token}"})

    def obtain_token(self, username: str, password: str) -> str:
        """Log in through the token endpoint and use the access token for the following calls"""
        response = self._send("POST", "/api/auth/token", {"username": username, "password": password})
        body = self._parse(response)
        token = body.get("access") if isinstance(body, dict) else None
        if not token:
            raise ApiError("Login failed", response.status_code, body)
        self.authenticate(token)
        return token

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, json=None) -> requests.Response:
        try:
            return self.session.request(method, self.url(path), json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise ApiError(f"Could not reach the server: {str(e)}") from e

    @staticmethod
    def _parse(response: requests.Response):
        try:
            return response.json()
        except ValueError:
            return None

    def request(self, method: str, path: str, json=None):
        response = self._send(method, path, json)
        body = self._parse(response)

        if not response.ok:
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("message") or body.get("detail")
            message = message or response.reason or "Request failed"
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, response.status_code, body)

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def get(self, path: str):
        return self.request("GET", path)

    def post(self, path: str, data=None):
        return self.request("POST", path, data)

    def put(self, path: str, data=None):
        return self.request("PUT", path, data)

    def patch(self, path: str, data=None):
        return self.request("PATCH", path, data)

    def delete(self, path: str, data=None):
        return self.request("DELETE", path, data)
