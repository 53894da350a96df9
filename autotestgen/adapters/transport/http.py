"""Authenticated HTTPS POST transport with optional proxy routing.

Two connection strategies exist: a direct TLS connection and one routed
through an HTTP proxy that intercepts every scheme. Which one is used is
decided per call from the environment; a fresh ``httpx.Client`` is created
for each request and closed afterwards, so nothing is shared between
generation sessions.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Protocol

import httpx

from ...config.credentials import CredentialManager
from ...config.models import TransportConfig
from ...ports.codegen_error import ConfigurationError, ProtocolError, TransportError

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., httpx.Client]


class TransportKind(str, Enum):
    """Connection strategies available to the transport."""

    DIRECT = "direct"
    PROXIED = "proxied"


@dataclass(frozen=True)
class HttpRequest:
    """A fully built POST request."""

    url: str
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)


def build_request(url: str, body: str, api_key: str) -> HttpRequest:
    """Build a JSON POST carrying a bearer credential."""
    return HttpRequest(
        url=url,
        body=body,
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
    )


class HttpTransport(Protocol):
    kind: TransportKind

    def send(self, request: HttpRequest) -> str:
        """Send one request and return the UTF-8 decoded response body."""
        ...


class DirectTransport:
    """Direct TLS connection to the endpoint."""

    kind = TransportKind.DIRECT

    def __init__(
        self,
        timeout: float = 180.0,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.timeout = timeout
        self.client_factory = client_factory or httpx.Client

    def _client_kwargs(self) -> dict[str, Any]:
        return {"timeout": self.timeout, "trust_env": False}

    def send(self, request: HttpRequest) -> str:
        with self.client_factory(**self._client_kwargs()) as client:
            return _post(client, request)


class ProxiedTransport(DirectTransport):
    """All traffic routed through an HTTP proxy."""

    kind = TransportKind.PROXIED

    def __init__(
        self,
        proxy_url: str,
        timeout: float = 180.0,
        client_factory: ClientFactory | None = None,
    ) -> None:
        super().__init__(timeout=timeout, client_factory=client_factory)
        self.proxy_url = proxy_url

    def _client_kwargs(self) -> dict[str, Any]:
        return {"timeout": self.timeout, "trust_env": False, "proxy": self.proxy_url}


def _validate_proxy_url(proxy_url: str) -> str:
    try:
        url = httpx.URL(proxy_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid HTTP proxy URL: {proxy_url!r}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"Invalid HTTP proxy URL: {proxy_url!r} (expected http:// or https:// with a host)"
        )
    return proxy_url


def select_transport(
    credential_manager: CredentialManager,
    timeout: float = 180.0,
    client_factory: ClientFactory | None = None,
) -> DirectTransport | ProxiedTransport:
    """Pick the connection strategy from the current environment.

    Raises:
        ConfigurationError: If a proxy is configured but its URL is malformed.
    """
    proxy_url = credential_manager.proxy_url()
    if proxy_url:
        logger.debug(f"Routing request through proxy {proxy_url}")
        return ProxiedTransport(
            _validate_proxy_url(proxy_url), timeout=timeout, client_factory=client_factory
        )
    return DirectTransport(timeout=timeout, client_factory=client_factory)


def _post(client: httpx.Client, request: HttpRequest) -> str:
    try:
        response = client.post(
            request.url, content=request.body.encode("utf-8"), headers=dict(request.headers)
        )
    except httpx.TimeoutException as e:
        raise TransportError(f"Request to {request.url} timed out: {e}") from e
    except httpx.TransportError as e:
        raise TransportError(f"Request to {request.url} failed: {e}") from e

    try:
        body = response.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocolError(
            "Response body is not valid UTF-8", status_code=response.status_code
        ) from e

    if not response.is_success:
        raise ProtocolError(
            f"Unexpected HTTP status {response.status_code} from {request.url}",
            status_code=response.status_code,
            raw=body,
        )
    return body


def send_with_retries(
    transport: HttpTransport,
    request: HttpRequest,
    max_retries: int = 0,
    backoff_base: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Send a request, retrying only on `TransportError` with exponential backoff."""
    attempt = 0
    while True:
        try:
            return transport.send(request)
        except TransportError as e:
            if attempt >= max_retries:
                raise
            delay = backoff_base * (2**attempt)
            attempt += 1
            logger.warning(
                f"Transport failure ({e.message}); retry {attempt}/{max_retries} in {delay:.1f}s"
            )
            sleep(delay)


def post_json(
    url: str,
    body: str,
    credential_manager: CredentialManager,
    transport_config: TransportConfig | None = None,
    client_factory: ClientFactory | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Perform one authenticated JSON POST and return the response body.

    The credential is resolved first, so a missing key fails before any
    connection is attempted.
    """
    transport_config = transport_config or TransportConfig()
    api_key = credential_manager.require_api_key()
    transport = select_transport(
        credential_manager, timeout=transport_config.timeout, client_factory=client_factory
    )
    request = build_request(url, body, api_key)
    logger.debug(f"POST {url} via {transport.kind.value} connection")
    return send_with_retries(
        transport,
        request,
        max_retries=transport_config.max_retries,
        backoff_base=transport_config.backoff_base,
        sleep=sleep,
    )
