"""User Management API client.

A thin wrapper around the ``/api/users`` REST surface using the
``requests`` library.  It is meant for scripts and other services that
need to manage users on a running instance.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` (or an empty list for
listings) and ``error`` is a dictionary with the keys ``status_code``
and ``message``.  ``status_code`` is ``None`` when the server could
not be reached at all.

The client supports optional authentication via an API key which will
be sent in the ``Authorization`` header.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class UserManagementClient:
    """Client for the user management API."""

    USERS_PATH = "/api/users"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:8000``.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` is included
                in all requests.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and ``error``
            is ``None``.  On failure ``data`` is ``None`` and ``error``
            describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = detail if isinstance(detail, str) else str(detail or err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all users."""
        return self._list(self.USERS_PATH)

    def list_active_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve users whose ``active`` flag is set."""
        return self._list(f"{self.USERS_PATH}/active")

    def get_user(self, user_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single user by ID.  A missing user is a 404 error."""
        return self._request("GET", f"{self.USERS_PATH}/{user_id}")

    def get_user_by_username(self, username: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single user by username."""
        return self._request("GET", f"{self.USERS_PATH}/username/{quote(username, safe='')}")

    def create_user(
        self,
        username: str,
        email: str,
        full_name: Optional[str] = None,
        active: bool = True,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a user and return the stored record including its ``id``."""
        payload = {"username": username, "email": email, "fullName": full_name, "active": active}
        return self._request("POST", self.USERS_PATH, json_body=payload)

    def update_user(
        self,
        user_id: int,
        username: str,
        email: str,
        full_name: Optional[str] = None,
        active: bool = True,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace all mutable fields of a user."""
        payload = {"username": username, "email": email, "fullName": full_name, "active": active}
        return self._request("PUT", f"{self.USERS_PATH}/{user_id}", json_body=payload)

    def delete_user(self, user_id: int) -> Tuple[bool, Optional[Error]]:
        """Delete a user.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"{self.USERS_PATH}/{user_id}")
        return error is None, error
