"""MMO directory API client.

A small wrapper around the directory REST API for consumers such as
the web frontend, admin scripts or bots.  It uses the ``requests``
library internally.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty (``None`` or ``[]``) and
``error`` is a dictionary with ``status_code`` and ``message`` keys.
Network failures have ``status_code`` set to ``None``.

Example::

    api = DirectoryAPI(base_url="http://localhost:5083")
    listing, error = api.directory("ngân hàng")
    if not error:
        for admin in listing["admins"]:
            print(admin["HoTen"])
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class DirectoryAPI:
    """Client for the member endpoints of the directory API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1/users",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:5083``.
            prefix: Path under which the member routes are mounted.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request against a member route.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the member prefix (e.g. ``/search``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{self.prefix}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
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
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all members, richest first."""
        return self._list("/")

    def get_user(self, user_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/{user_id}")

    def get_by_slug(self, slug: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/slug/{slug}")

    def get_profile(self, slug: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch the detail page data (member, Zalo contact, insurance fund)."""
        return self._request("GET", f"/profile/{slug}")

    def directory(self, query: str = "") -> Tuple[Dict[str, List[Dict[str, Any]]], Optional[Error]]:
        """Fetch the home page listing of active Admins and KDVs."""
        data, error = self._request("GET", "/directory", params={"q": query})
        if error or not isinstance(data, dict):
            return {"admins": [], "moderators": []}, error
        return data, None

    def search(self, keyword: str = "") -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/search", {"keyword": keyword})

    def filter_by_service(self, service: str = "") -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/filter-service", {"service": service})

    def filter_by_status(self, status: Any) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/filter-status", {"status": status})

    def filter_by_role(self, role: Any) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        return self._list("/filter-role", {"role": role})

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create_user(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/", json_body=payload)

    def update_user(self, user_id: Any, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send a partial update; fields not in ``payload`` are kept."""
        return self._request("PUT", f"/{user_id}", json_body=payload)

    def delete_user(self, user_id: Any) -> Tuple[bool, Optional[Error]]:
        data, error = self._request("DELETE", f"/{user_id}")
        if error:
            return False, error
        return data is not None, None
