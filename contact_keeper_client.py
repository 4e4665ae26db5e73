"""Contact Keeper API client.

A thin wrapper around the Contact Keeper REST API built on the
``requests`` library.  It keeps the access token returned by
:meth:`ContactKeeperAPI.register` or :meth:`ContactKeeperAPI.login` and
sends it in the ``x-auth-token`` header on later calls.

The client exposes one method per API operation:

* :meth:`register` – create an account and store its token.
* :meth:`login` – authenticate and store the token.
* :meth:`get_current_user` – fetch the logged in user's profile.
* :meth:`list_contacts` – return the user's contacts, newest first.
* :meth:`create_contact` – add a contact.
* :meth:`update_contact` – change selected fields of a contact.
* :meth:`delete_contact` – remove a contact.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` (and ``errors`` for field
validation failures).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiResult = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ContactKeeperAPI:
    """Client for the Contact Keeper API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        auth_header: str = "x-auth-token",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:5000``.
            token: Optional access token from an earlier login.
            auth_header: Header the server reads the token from.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.auth_header = auth_header
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any | None = None) -> ApiResult:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/contacts``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers[self.auth_header] = self.token
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
            return None, self._error_from_response(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_from_response(exc: requests.HTTPError) -> Dict[str, Any]:
        response = exc.response
        status = response.status_code if response is not None else None
        error: Dict[str, Any] = {"status_code": status, "message": ""}
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                if "errors" in body:
                    error["errors"] = body["errors"]
                    error["message"] = "; ".join(e.get("msg", "") for e in body["errors"] if isinstance(e, dict))
                else:
                    error["message"] = body.get("msg") or body.get("detail") or str(body)
            else:
                error["message"] = response.text
        if not error["message"]:
            error["message"] = str(exc)
        logger.error("API request failed (%s): %s", status, error["message"])
        return error

    # ------------------------------------------------------------------
    # Users and authentication
    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> ApiResult:
        """Register a new account.  The returned token is kept for later calls."""
        data, error = self._request(
            "POST", "/api/users", json_body={"name": name, "email": email, "password": password}
        )
        if error:
            return None, error
        self.token = data.get("token")
        return data, None

    def login(self, email: str, password: str) -> ApiResult:
        """Log in.  The returned token is kept for later calls."""
        data, error = self._request("POST", "/api/auth", json_body={"email": email, "password": password})
        if error:
            return None, error
        self.token = data.get("token")
        return data, None

    def logout(self) -> None:
        """Forget the stored token.  Tokens are stateless, so nothing is sent."""
        self.token = None

    def get_current_user(self) -> ApiResult:
        return self._request("GET", "/api/auth")

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------
    def list_contacts(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve the user's contacts.

        Returns:
            A tuple ``(contacts, error)``.  ``contacts`` is empty on failure.
        """
        data, error = self._request("GET", "/api/contacts")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    def create_contact(
        self,
        name: str,
        *,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        type: Optional[str] = None,
    ) -> ApiResult:
        payload = {"name": name, "email": email, "phone": phone, "type": type}
        return self._request(
            "POST", "/api/contacts", json_body={k: v for k, v in payload.items() if v is not None}
        )

    def update_contact(self, contact_id: Any, **fields: Any) -> ApiResult:
        """Update a contact.

        Args:
            contact_id: Identifier of the contact.
            **fields: Any of ``name``, ``email``, ``phone`` and ``type``.
                Fields left out keep their current values.
        """
        return self._request("PUT", f"/api/contacts/{contact_id}", json_body=fields)

    def delete_contact(self, contact_id: Any) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a contact.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/api/contacts/{contact_id}")
        if error:
            return False, error
        return True, None
