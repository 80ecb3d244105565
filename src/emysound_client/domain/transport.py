"""
HTTP transport for the EmySound API.

Owns endpoint URL construction, query-parameter encoding, authentication and
the Accept header. One transport is built per process and shared by every
operation; it keeps no per-request state.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple
from urllib.parse import urljoin

import requests
from loguru import logger

from .exceptions import TransportError

# Default API root of a local EmySound server
DEFAULT_API_ROOT = "http://localhost:3340/api/v1.1/"

# EmySound's fixed administrative principal (empty secret)
DEFAULT_USERNAME = "ADMIN"
DEFAULT_PASSWORD = ""

OCTET_STREAM = "application/octet-stream"

# (file_name, payload, content_type)
FilePart = Tuple[str, bytes, str]


@dataclass(frozen=True)
class TransportResponse:
    """Status and raw text of a completed exchange."""

    status: int
    text: str

    @property
    def ok(self) -> bool:
        return self.status == 200


class Transport(Protocol):
    """Sends one authenticated multipart POST and returns the full response."""

    def post_multipart(
        self,
        endpoint: str,
        files: Mapping[str, FilePart],
        data: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse: ...


def normalize_api_root(api_root: str) -> str:
    """Ensure the root ends in "/" so joining keeps the version segment."""
    return api_root if api_root.endswith("/") else api_root + "/"


class HttpTransport:
    """`requests`-based transport with HTTP Basic auth.

    Args:
        api_root: Base URL, e.g. http://localhost:3340/api/v1.1/
        username: Basic auth principal
        password: Basic auth secret
        timeout: Seconds to wait for connect/read (None waits forever)
        session: Optional pre-built session; it is not modified, auth and
            the Accept header are sent with each request
    """

    def __init__(
        self,
        api_root: str = DEFAULT_API_ROOT,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        timeout: Optional[float] = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_root = normalize_api_root(api_root)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.auth = (username, password)
        self.headers = {"Accept": "application/json"}

    def url_for(self, endpoint: str) -> str:
        return urljoin(self.api_root, endpoint)

    def post_multipart(
        self,
        endpoint: str,
        files: Mapping[str, FilePart],
        data: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        url = self.url_for(endpoint)
        logger.debug(f"Sending request to EmySound: POST {url} params={dict(params or {})}")

        request_kwargs: Dict[str, Any] = {
            "files": dict(files),
            "auth": self.auth,
            "headers": dict(self.headers),
            "timeout": self.timeout,
        }
        if data:
            request_kwargs["data"] = dict(data)
        if params:
            request_kwargs["params"] = dict(params)

        try:
            response = self.session.post(url, **request_kwargs)
            text = response.text
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug(f"EmySound responded {response.status_code} ({len(text)} chars)")
        return TransportResponse(status=response.status_code, text=text)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
