from .http import (
    DirectTransport,
    HttpRequest,
    HttpTransport,
    ProxiedTransport,
    TransportKind,
    build_request,
    post_json,
    select_transport,
)

__all__ = [
    "HttpRequest",
    "HttpTransport",
    "TransportKind",
    "DirectTransport",
    "ProxiedTransport",
    "build_request",
    "select_transport",
    "post_json",
]
