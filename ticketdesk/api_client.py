from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from ticketdesk.config import AppConfig

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiError(Exception):
    """A backend call failed; ``str(exc)`` is the user-facing message."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class ApiResult:
    ok: bool
    status_code: int
    method: str
    url: str
    data: Any = None
    error: Optional[str] = None

    def unwrap(self) -> Any:
        if not self.ok:
            raise ApiError(self.error or "Request failed", self.status_code)
        return self.data


def envelope_list(body: Any) -> List[Dict[str, Any]]:
    """Records from a ``{success, data: [...]}`` list response, else []."""
    if isinstance(body, dict) and body.get("success"):
        data = body.get("data") or []
        if isinstance(data, list):
            return [d for d in data if isinstance(d, dict)]
    return []


def _json_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {}


class ApiClient:
    def __init__(
        self,
        *,
        base_url: str = "",
        token_provider: Optional[TokenProvider] = None,
        timeout_seconds: int = 30,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.token_provider = token_provider
        self.timeout_seconds = int(timeout_seconds)
        self.verify_ssl = bool(verify_ssl)

        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, cfg: AppConfig, token_provider: Optional[TokenProvider] = None) -> "ApiClient":
        return cls(
            base_url=cfg.api_base_url,
            token_provider=token_provider,
            timeout_seconds=cfg.http_timeout_seconds,
            verify_ssl=cfg.verify_ssl,
        )

    def url_for(self, path: str) -> str:
        path = path or ""
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    def call(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        files: Optional[Dict[str, Any]] = None,
        binary: bool = False,
        fallback_error: str = "Request failed",
        use_reason: bool = True,
    ) -> ApiResult:
        """Perform one request and describe the outcome without raising.

        ``files`` switches to a multipart body and drops the JSON content
        type. ``binary`` returns the raw bytes of a successful response.
        """
        method_u = (method or "GET").upper().strip()
        url = self.url_for(path)

        headers: Dict[str, str] = {}
        if files is None:
            headers["Content-Type"] = "application/json"
            headers["Accept"] = "application/json"
        headers.update(self._auth_headers())

        try:
            resp = self._session.request(
                method_u,
                url,
                json=json_body,
                files=files,
                headers=headers,
                verify=self.verify_ssl,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method_u, url, exc)
            return ApiResult(ok=False, status_code=0, method=method_u, url=url, error=str(exc) or fallback_error)

        status = int(resp.status_code)
        ok = 200 <= status < 300
        logger.debug("%s %s -> %s", method_u, url, status)

        if ok and binary:
            return ApiResult(ok=True, status_code=status, method=method_u, url=url, data=resp.content)

        body = _json_body(resp)
        if ok:
            return ApiResult(ok=True, status_code=status, method=method_u, url=url, data=body)

        message = body.get("message") if isinstance(body, dict) else None
        if not message and use_reason:
            message = resp.reason
        error = str(message or fallback_error)
        logger.warning("%s %s -> %s: %s", method_u, url, status, error)
        return ApiResult(ok=False, status_code=status, method=method_u, url=url, data=body, error=error)

    def request(self, method: str, path: str, json_body: Any = None) -> Any:
        return self.call(method, path, json_body=json_body).unwrap()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, data: Any = None) -> Any:
        return self.request("POST", path, data)

    def put(self, path: str, data: Any = None) -> Any:
        return self.request("PUT", path, data)

    def patch(self, path: str, data: Any = None) -> Any:
        return self.request("PATCH", path, data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def upload_evidence(self, task_id: Any, file_name: str, content: bytes, mime_type: str = "application/octet-stream") -> Any:
        result = self.call(
            "POST",
            f"/api/evidence/{task_id}",
            files={"evidence": (file_name, content, mime_type)},
            fallback_error="Upload failed",
            use_reason=False,
        )
        return result.unwrap()

    def export_tasks_excel(self, filters: Dict[str, Any]) -> bytes:
        result = self.call(
            "POST",
            "/api/tasks/export",
            json_body=filters,
            binary=True,
            fallback_error="Export failed",
            use_reason=False,
        )
        return result.unwrap()
