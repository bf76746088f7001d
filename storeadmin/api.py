from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import requests
import streamlit as st

logger = logging.getLogger(__name__)

# (field name, (file name, bytes, content type))
FilePart = tuple[str, tuple[str, bytes, str]]


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ApiError):
    pass


def unwrap_list(payload: Any) -> list[dict]:
    """
    Normalize a list response.

    Accepts the ``{"success": true, "data": [...]}`` envelope or a bare array.
    ``success=false``, a missing ``data`` key or a non-array ``data`` all mean
    "no rows", never an error.
    """
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict) and payload.get("success", True) and isinstance(payload.get("data"), list):
        rows = payload["data"]
    else:
        return []
    return [r for r in rows if isinstance(r, dict)]


def unwrap_record(payload: Any, *keys: str) -> dict:
    if not isinstance(payload, dict):
        return {}
    for key in keys or ("data",):
        value = payload.get(key)
        if isinstance(value, dict):
            return value
    return payload


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"


class ApiClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict] = None,
        data: Optional[dict] = None,
        files: Optional[Iterable[FilePart]] = None,
    ) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, json=json, data=data, files=list(files) if files else None)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"Could not reach the server ({e.__class__.__name__}).") from e

        if resp.status_code == 404:
            raise NotFoundError(_error_message(resp), status_code=404)
        if not resp.ok:
            logger.warning("%s %s -> %s", method, url, resp.status_code)
            raise ApiError(_error_message(resp), status_code=resp.status_code)

        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError("Server returned a non-JSON response.", status_code=resp.status_code) from e

    def get_list(self, path: str) -> list[dict]:
        return unwrap_list(self.request("GET", path))

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


@st.cache_resource
def get_client(base_url: str) -> ApiClient:
    return ApiClient(base_url)
