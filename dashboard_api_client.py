"""Content dashboard API client.

This module defines a small client for the dashboard's REST API, used
by the dashboard screens and by scripts that manage content.  It uses
the ``requests`` library internally and understands the API's response
envelope (``{"success", "data", "message", "errors"}``).

The base URL is taken from the ``base_url`` argument, falling back to
the ``DASHBOARD_API_URL`` environment variable and finally to
``http://localhost:8000``.  Every call goes to ``<base_url>/api/...``.

The client exposes one resource helper per collection:

* :attr:`DashboardAPI.blogs` and :attr:`DashboardAPI.projects` with
  ``list``, ``get``, ``create``, ``update`` and ``delete``.
* :attr:`DashboardAPI.gallery` with ``list``, ``get``, ``create``,
  ``upload`` and ``delete``.
* :meth:`DashboardAPI.health` for the health check.

Operations return a tuple ``(result, error)``.  On failure ``result``
is empty (``[]``, ``None`` or ``False``) and ``error`` is a dictionary
with ``status_code``, ``message`` and ``errors`` taken from the failure
envelope.
"""

from __future__ import annotations

import logging
import os
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"

Error = Dict[str, Any]


class ResourceClient:
    """CRUD helper bound to one collection path such as ``/api/blogs``."""

    def __init__(self, api: "DashboardAPI", collection: str) -> None:
        self.api = api
        self.path = f"/api/{collection}"

    def list(self, status: Optional[str] = None) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve every record, optionally only those with ``status``."""
        params = {"status": status} if status else None
        body, error = self.api._request("GET", self.path, params=params)
        if error:
            return [], error
        return body.get("data") or [], None

    def get(self, entity_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        body, error = self.api._request("GET", f"{self.path}/{entity_id}")
        if error:
            return None, error
        return body.get("data"), None

    def create(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        body, error = self.api._request("POST", self.path, json_body=payload)
        if error:
            return None, error
        return body.get("data"), None

    def update(self, entity_id: str, changes: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Send a partial update; only keys present in ``changes`` are modified."""
        body, error = self.api._request("PUT", f"{self.path}/{entity_id}", json_body=changes)
        if error:
            return None, error
        return body.get("data"), None

    def delete(self, entity_id: str) -> Tuple[bool, Optional[Error]]:
        _, error = self.api._request("DELETE", f"{self.path}/{entity_id}")
        if error:
            return False, error
        return True, None


class GalleryClient(ResourceClient):
    """Gallery collection helper with file uploads."""

    def __init__(self, api: "DashboardAPI") -> None:
        super().__init__(api, "gallery")

    def upload(
        self,
        fileobj: BinaryIO,
        filename: str,
        content_type: str,
        name: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Upload an image file; the server stores it and records its URL."""
        form = {"name": name} if name else None
        files = {"file": (filename, fileobj, content_type)}
        body, error = self.api._request("POST", self.path, files=files, form=form)
        if error:
            return None, error
        return body.get("data"), None


class DashboardAPI:
    """Client for the content dashboard API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``https://cms.example.com``.
                Defaults to ``DASHBOARD_API_URL`` or ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = (base_url or os.getenv("DASHBOARD_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.blogs = ResourceClient(self, "blogs")
        self.projects = ResourceClient(self, "projects")
        self.gallery = GalleryClient(self)

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        files: Dict[str, Any] | None = None,
        form: Dict[str, Any] | None = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Perform an HTTP request and unwrap the response envelope.

        Returns:
            A tuple ``(body, error)``.  ``body`` is the decoded success
            envelope and ``error`` is ``None``.  On failure (transport
            error, non-2xx status, undecodable body or
            ``success: false``) ``body`` is ``None`` and ``error``
            describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                files=files,
                data=form,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": []}

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            message = f"Unexpected response from {method} {path}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message, "errors": []}
        if not response.ok or not body.get("success"):
            message = body.get("message") or f"Request failed with status {response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {
                "status_code": response.status_code,
                "message": message,
                "errors": body.get("errors") or [],
            }
        return body, None

    def health(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return ``status``, ``timestamp`` and ``message`` from the health check."""
        body, error = self._request("GET", "/api/health")
        if error:
            return None, error
        return {
            "status": body.get("status", "unknown"),
            "timestamp": body.get("timestamp"),
            "message": body.get("message", "No status message"),
        }, None
