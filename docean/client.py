"""Core HTTP client for the DigitalOcean API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping
from urllib.parse import parse_qs, urlencode, urljoin, urlsplit, urlunsplit

import requests

from .links import Links

LIBRARY_VERSION = "1.16.0"
DEFAULT_BASE_URL = "https://api.digitalocean.com/"
USER_AGENT = "godo/" + LIBRARY_VERSION
MEDIA_TYPE = "application/json"

HEADER_RATE_LIMIT = "RateLimit-Limit"
HEADER_RATE_REMAINING = "RateLimit-Remaining"
HEADER_RATE_RESET = "RateLimit-Reset"

RequestCompletionCallback = Callable[[requests.PreparedRequest, requests.Response], None]


class URLError(ValueError):
    """Raised when a URL cannot be parsed."""

    def __init__(self, op: str, url: str, reason: str) -> None:
        super().__init__(f'{op} "{url}": {reason}')
        self.op = op
        self.url = url
        self.reason = reason


def _check_url(raw: str) -> None:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        raise URLError("parse", raw, "net/url: invalid control character in URL")
    for index, ch in enumerate(raw):
        if ch.isascii() and ch.isalpha():
            continue
        if ch.isdigit() or ch in "+-.":
            if index == 0:
                return
            continue
        if ch == ":":
            if index == 0:
                raise URLError("parse", raw, "missing protocol scheme")
            return
        return


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class ListOptions:
    """Pagination parameters for list calls."""

    page: int = 0
    per_page: int = 0

    def to_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {}
        if self.page:
            query["page"] = self.page
        if self.per_page:
            query["per_page"] = self.per_page
        return query


def add_options(path: str, options: Any) -> str:
    """Merge the query parameters of ``options`` into ``path``."""
    if options is None:
        return path
    _check_url(path)
    new_values = options.to_query() if hasattr(options, "to_query") else dict(options)
    parts = urlsplit(path)
    values = parse_qs(parts.query, keep_blank_values=True)
    for key, value in new_values.items():
        items = value if isinstance(value, (list, tuple)) else [value]
        values[key] = [_query_value(v) for v in items]
    encoded = urlencode(sorted(values.items()), doseq=True)
    return urlunsplit(parts._replace(query=encoded))


@dataclass
class Rate:
    """Rate limit reported by the API."""

    limit: int = 0
    remaining: int = 0
    reset: datetime | None = None

    @staticmethod
    def from_headers(headers: Mapping[str, str]) -> "Rate":
        rate = Rate()
        limit = headers.get(HEADER_RATE_LIMIT) or ""
        if limit:
            rate.limit = _atoi(limit)
        remaining = headers.get(HEADER_RATE_REMAINING) or ""
        if remaining:
            rate.remaining = _atoi(remaining)
        reset = headers.get(HEADER_RATE_RESET) or ""
        if reset:
            seconds = _atoi(reset)
            if seconds:
                rate.reset = datetime.fromtimestamp(seconds, tz=timezone.utc)
        return rate


def _atoi(text: str) -> int:
    try:
        return int(text.strip()) if text.strip() == text else 0
    except ValueError:
        return 0


@dataclass
class Response:
    """An API response with its pagination links and rate limit."""

    http_response: requests.Response
    links: Links | None = None
    monitor: str = ""
    rate: Rate = field(default_factory=Rate)

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.http_response.headers

    @property
    def content(self) -> bytes:
        return self.http_response.content

    def json(self) -> Any:
        """Decode the response body as JSON."""
        return json.loads(self.http_response.content)


class ErrorResponse(Exception):
    """An error reported by the API for a request."""

    def __init__(
        self, response: requests.Response, message: str = "", request_id: str = ""
    ) -> None:
        super().__init__(message)
        self.response = response
        self.message = message
        self.request_id = request_id

    def __str__(self) -> str:
        request = self.response.request
        method = request.method if request is not None else ""
        url = request.url if request is not None else ""
        status = self.response.status_code
        if self.request_id:
            return f"{method} {url}: {status} (request {json.dumps(self.request_id)}) {self.message}"
        return f"{method} {url}: {status} {self.message}"


def check_response(http_response: requests.Response) -> None:
    """Raise ErrorResponse if the status code is outside the 2xx range."""
    if 200 <= http_response.status_code <= 299:
        return
    error = ErrorResponse(http_response)
    data = http_response.content
    if data:
        try:
            parsed = json.loads(data)
            if not isinstance(parsed, dict):
                raise ValueError("not an object")
            message = parsed.get("message", "")
            request_id = parsed.get("request_id", "")
            if not isinstance(message, str) or not isinstance(request_id, str):
                raise ValueError("unexpected field types")
            error.message = message
            error.request_id = request_id
        except ValueError:
            error.message = data.decode("utf-8", errors="replace")
    raise error


class Client:
    """Sends requests to the API and tracks the rate limit."""

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str | None = None,
    ) -> None:
        _check_url(base_url)
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url
        self.user_agent = f"{user_agent} {USER_AGENT}" if user_agent else USER_AGENT
        self.rate = Rate()
        self._on_request_completed: RequestCompletionCallback | None = None

    def new_request(
        self, method: str, path: str, body: Any = None
    ) -> requests.PreparedRequest:
        """Build a request for ``path`` resolved against the base URL."""
        _check_url(path)
        url = urljoin(self.base_url, path)
        data = b""
        if body is not None:
            payload = body.to_dict() if hasattr(body, "to_dict") else body
            data = (json.dumps(payload, separators=(",", ":")) + "\n").encode("utf-8")
        headers = {
            "Content-Type": MEDIA_TYPE,
            "Accept": MEDIA_TYPE,
            "User-Agent": self.user_agent,
        }
        return requests.Request(method, url, data=data, headers=headers).prepare()

    def on_request_completed(self, callback: RequestCompletionCallback | None) -> None:
        """Set a function called after every completed request."""
        self._on_request_completed = callback

    def do(self, request: requests.PreparedRequest) -> Response:
        """Send a request and return the response, raising on API errors."""
        http_response = self.session.send(request)
        if self._on_request_completed is not None:
            self._on_request_completed(request, http_response)
        response = Response(http_response, rate=Rate.from_headers(http_response.headers))
        self.rate = response.rate
        check_response(http_response)
        return response