# taskboard/client/api.py
"""Blocking HTTP wrapper over the task API."""
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class APIError(Exception):
    """A failed call, carrying the server-supplied message when there is one"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskboardClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise APIError(str(e))

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if response.status_code >= 400 or not payload.get("success", False):
            message = payload.get("message") or f"Request failed with status {response.status_code}"
            raise APIError(message, response.status_code)
        return payload

    # Auth

    def register(self, email: str, password: str, username: str) -> Dict[str, Any]:
        payload = self._request(
            "POST", "/auth/register",
            json={"email": email, "password": password, "username": username},
        )
        self.token = payload["data"]["token"]
        return payload["data"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        payload = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = payload["data"]["token"]
        return payload["data"]

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["data"]

    def logout(self) -> None:
        self.token = None

    # Tasks

    def list_tasks(self, status: Optional[str] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {}
        if status:
            params["status"] = status
        if search:
            params["search"] = search
        return self._request("GET", "/tasks", params=params)["data"]

    def get_stats(self) -> Dict[str, int]:
        return self._request("GET", "/tasks/stats")["data"]

    def get_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")["data"]

    def create_task(self, title: str, status: Optional[str] = None) -> Dict[str, Any]:
        body = {"title": title}
        if status is not None:
            body["status"] = status
        return self._request("POST", "/tasks", json=body)["data"]

    def update_task(self, task_id: int, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", json=fields)["data"]

    def delete_task(self, task_id: int) -> int:
        self._request("DELETE", f"/tasks/{task_id}")
        return task_id
