"""HTTP GET client for fetch probes.

Connecting and reading the body are separate steps so callers can tell "could not reach the
server" apart from "connection dropped mid-body". Status codes are not interpreted: an error page
is still useful diagnostic output.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import requests

DEFAULT_USER_AGENT = "network-analyzer"


@runtime_checkable
class HttpProvider(Protocol):
    def get(self, url: str, timeout: Optional[float] = None) -> requests.Response: ...

    def read_body(self, response: requests.Response) -> bytes: ...


class DefaultHttpProvider:
    def __init__(self, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.user_agent = user_agent

    def get(self, url: str, timeout: Optional[float] = None) -> requests.Response:
        return requests.get(url, headers={"User-Agent": self.user_agent}, timeout=timeout, stream=True)

    def read_body(self, response: requests.Response) -> bytes:
        try:
            return response.content
        finally:
            response.close()


def get_http_provider(user_agent: str = DEFAULT_USER_AGENT) -> HttpProvider:
    """Seam for swapping the HTTP client."""
    return DefaultHttpProvider(user_agent=user_agent)


__all__ = ["DEFAULT_USER_AGENT", "HttpProvider", "DefaultHttpProvider", "get_http_provider"]
