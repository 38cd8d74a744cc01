"""
HTTP Storage Backend.

Talks to the portfolio's admin API, which stores one expertise document:
- GET  {base_url}/api/admin/expertise -> {"success": true, "data": {...}}
- PUT  {base_url}/api/admin/expertise with the whole document as JSON body

Requests carry ``Authorization: Bearer <token>``.
"""

import logging
from typing import Any, Dict, Optional

import requests

from orbit.model import GraphModel
from orbit.storage.protocol import PersistenceError

logger = logging.getLogger(__name__)

EXPERTISE_ENDPOINT = "/api/admin/expertise"
DEFAULT_TIMEOUT = 10


class HttpGateway:
    """Remote storage through the admin REST endpoint."""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.url = base_url.rstrip("/") + EXPERTISE_ENDPOINT
        self.token = token
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def backend_type(self) -> str:
        return "http"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def load(self) -> GraphModel:
        try:
            response = self._session.get(self.url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise PersistenceError(f"Failed to reach {self.url}: {e}") from e

        # The API answers 404 until the first save
        if response.status_code == 404:
            logger.info("No expertise data stored yet, starting from the default document")
            return GraphModel.default()
        if not response.ok:
            raise PersistenceError(f"Load failed with HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise PersistenceError(f"Load returned invalid JSON: {e}") from e
        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            raise PersistenceError(f"Load rejected: {error or 'unknown error'}")

        model = GraphModel.from_dict(body.get("data"))
        logger.info(f"Loaded {len(model.categories)} categories from {self.url}")
        return model

    def save(self, model: GraphModel) -> Dict[str, Any]:
        try:
            response = self._session.put(
                self.url, json=model.to_dict(), headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Save to {self.url} failed: {e}")
            return {"success": False, "message": f"Save failed: {e}"}

        if not response.ok:
            logger.error(f"Save to {self.url} failed with HTTP {response.status_code}")
            return {"success": False, "message": f"Save failed (HTTP {response.status_code})"}
        logger.info(f"Saved {len(model.categories)} categories to {self.url}")
        return {"success": True, "message": "Universe updated successfully!"}
