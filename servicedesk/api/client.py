from typing import Any

import requests

from servicedesk.core.config import settings
from servicedesk.core.errors import ApiError, UnauthorizedError, message_from_body
from servicedesk.core.logging import logger
from servicedesk.core.security import AuthSession


def _clean_params(params: dict | None) -> dict | None:
    if not params:
        return None
    out = {k: v for k, v in params.items() if v is not None and v != ""}
    return out or None


def _parse_body(resp: requests.Response) -> Any:
    if resp.status_code == 204:
        return None
    content_type = resp.headers.get("Content-Type", "")
    if "application/json" in content_type:
        try:
            return resp.json()
        except ValueError:
            return resp.text
    return resp.text


class ApiClient:
    """Thin wrapper over a requests session for the service gateway.

    Adds the bearer token, decodes JSON bodies and turns error responses
    into ApiError with the backend's message.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: AuthSession | None = None,
        http: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session if session is not None else AuthSession()
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    def url(self, path: str, base_url: str | None = None) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        base = (base_url or self.base_url).rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def _headers(self, extra: dict | None = None) -> dict:
        headers = {"Accept": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        if extra:
            headers.update(extra)
        return headers

    def _check(self, resp: requests.Response, method: str, path: str) -> Any:
        if resp.status_code in (401, 403):
            self.session.clear()
            body = _parse_body(resp)
            message = message_from_body(body) if isinstance(body, dict) else None
            logger.warning("api_unauthorized", method=method, path=path, status=resp.status_code)
            raise UnauthorizedError(message or resp.reason or "Unauthorized", resp.status_code, body)

        body = _parse_body(resp)
        if not resp.ok:
            message = message_from_body(body) or resp.reason or f"Request failed with status {resp.status_code}"
            logger.info("api_error", method=method, path=path, status=resp.status_code, error=message)
            raise ApiError(message, resp.status_code, body)
        return body

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict | None = None,
        data: dict | None = None,
        files: dict | None = None,
        headers: dict | None = None,
        base_url: str | None = None,
        raw: bool = False,
    ) -> Any:
        url = self.url(path, base_url)
        try:
            resp = self.http.request(
                method,
                url,
                json=json,
                params=_clean_params(params),
                data=data,
                files=files,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("api_unreachable", method=method, path=path, error=str(e))
            raise ApiError(str(e) or "Network error") from e

        logger.debug("api_request", method=method, path=path, status=resp.status_code)
        if raw:
            if resp.status_code in (401, 403) or not resp.ok:
                self._check(resp, method, path)
            return resp
        return self._check(resp, method, path)

    def get(self, path: str, **kw) -> Any:
        return self.request("GET", path, **kw)

    def post(self, path: str, **kw) -> Any:
        return self.request("POST", path, **kw)

    def patch(self, path: str, **kw) -> Any:
        return self.request("PATCH", path, **kw)

    def put(self, path: str, **kw) -> Any:
        return self.request("PUT", path, **kw)

    def delete(self, path: str, **kw) -> Any:
        return self.request("DELETE", path, **kw)

    def stream(self, path: str, params: dict | None = None, base_url: str | None = None) -> requests.Response:
        """Open a long-lived text/event-stream GET. Caller owns closing the response."""
        url = self.url(path, base_url)
        try:
            resp = self.http.request(
                "GET",
                url,
                params=_clean_params(params),
                headers=self._headers({"Accept": "text/event-stream", "Cache-Control": "no-cache"}),
                stream=True,
                timeout=settings.STREAM_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.warning("stream_unreachable", path=path, error=str(e))
            raise ApiError(str(e) or "Network error") from e
        if resp.status_code in (401, 403) or not resp.ok:
            try:
                self._check(resp, "GET", path)
            finally:
                resp.close()
        return resp

    def close(self) -> None:
        self.http.close()
