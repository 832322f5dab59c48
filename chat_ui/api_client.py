import logging

import requests

from . import config
from .errors import GatewayError, TransportError

logger = logging.getLogger(__name__)


class AuthClient:
    """Thin client for the auth gateway's /auth endpoints."""

    def __init__(self, base_url: str | None = None):
        self.base_url = (base_url or config.API_URL).rstrip("/")

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        try:
            r = requests.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error("no response from %s: %s", url, e)
            raise TransportError(f"Cannot connect to the server at {self.base_url}") from e

        try:
            data = r.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not r.ok:
            logger.warning("%s %s -> %s %s", method, path, r.status_code, data)
            raise GatewayError(
                r.status_code,
                data.get("error", "unknown"),
                data.get("message") or "Authentication failed",
            )
        return data

    def register(self, username: str, email: str, password: str) -> dict:
        return self._request(
            "POST", "/auth/register",
            json={"username": username, "email": email, "password": password},
        )

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def me(self, token: str) -> dict:
        return self._request("GET", "/auth/me", headers={"Authorization": f"Bearer {token}"})
