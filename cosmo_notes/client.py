"""HTTP client for the Cosmo Notes API."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, error: str | None, message: str | None) -> None:
        super().__init__(message or error or f"HTTP error {status_code}")
        self.status_code = status_code
        self.error = error
        self.message = message


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "true" if value else "false"


def _task_body(
    title: str | None = None,
    content: str | None = None,
    due_date: datetime | str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if title is not None:
        body["title"] = title
    if content is not None:
        body["content"] = content
    if due_date is not None:
        body["dueDate"] = due_date.isoformat() if isinstance(due_date, datetime) else due_date
    if tags is not None:
        body["tags"] = list(tags)
    return body


class CosmoNotesClient:
    def __init__(self, base_url: str, http: httpx.Client | None = None, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CosmoNotesClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, endpoint: str, **kwargs) -> dict[str, Any]:
        url = f"{self._base_url}{endpoint}"
        response = self._http.request(method, url, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.is_error:
            logger.warning("API request failed method=%s url=%s status=%s", method, url, response.status_code)
            raise ApiError(response.status_code, payload.get("error"), payload.get("message"))
        return payload

    def list_tasks(
        self,
        tag: str | None = None,
        overdue: bool | None = None,
        public: bool | None = None,
        user_id: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {
            "tag": tag,
            "overdue": _flag(overdue),
            "public": _flag(public),
            "userId": user_id,
        }
        params = {key: value for key, value in params.items() if value is not None}
        return self._request("GET", "/tasks", params=params)["data"]

    def create_task(
        self,
        title: str,
        content: str | None = None,
        due_date: datetime | str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        body = _task_body(title, content, due_date, tags)
        return self._request("POST", "/tasks", json=body)["data"]

    def get_task(self, task_id: str) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")["data"]

    def update_task(self, task_id: str, **fields) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", json=_task_body(**fields))["data"]

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def share_task(self, task_id: str) -> dict[str, Any]:
        return self._request("POST", f"/tasks/{task_id}/share")["data"]

    def unshare_task(self, task_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}/share")["data"]

    def get_shared_task(self, share_id: str) -> dict[str, Any]:
        return self._request("GET", f"/shared/{share_id}")["data"]

    def get_overdue_tasks(self, user_id: str | None = None) -> list[dict[str, Any]]:
        params = {"userId": user_id} if user_id else {}
        return self._request("GET", "/notifications/overdue", params=params)["data"]

    def update_overdue_status(self) -> dict[str, Any]:
        return self._request("POST", "/notifications/overdue/update")["data"]

    def send_overdue_notifications(self, user_id: str | None = None) -> int:
        body = {"userId": user_id} if user_id else {}
        return self._request("POST", "/notifications/overdue/send", json=body)["data"]["notificationsSent"]
