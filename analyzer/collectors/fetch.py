"""Fetch probe: HTTP GET, store the response body."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from analyzer.core.errors import ProbeError, wrap_error
from analyzer.core.store import ResultStore
from analyzer.providers.http_provider import HttpProvider, get_http_provider

logger = logging.getLogger(__name__)


class FetchProbe:
    """GET `url` and store the body under `name`. On any failure only an error is stored."""

    def __init__(
        self,
        name: str,
        url: str,
        store: ResultStore,
        *,
        timeout: Optional[float] = None,
        provider: Optional[HttpProvider] = None,
    ) -> None:
        self.name = name
        self.url = url
        self.store = store
        self.timeout = timeout
        self.provider = provider or get_http_provider()

    def __repr__(self) -> str:
        return f"FetchProbe(name={self.name!r}, url={self.url!r})"

    def run(self) -> None:
        try:
            response = self.provider.get(self.url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            self._fail(e, f"error getting {self.name}", operation="timeout")
            return
        except (requests.exceptions.RequestException, ValueError) as e:
            self._fail(e, f"error getting {self.name}", operation="get")
            return

        try:
            body = self.provider.read_body(response)
        except (requests.exceptions.RequestException, OSError) as e:
            self._fail(e, f"error reading {self.name} body", operation="read-body")
            return

        self.store.add_output(self.name, body)

    def _fail(self, cause: BaseException, message: str, *, operation: str) -> None:
        logger.warning("probe %s failed (%s): %s", self.name, operation, cause)
        err = ProbeError(message, probe=self.name, operation=operation)
        self.store.append_error(wrap_error(cause, err))


__all__ = ["FetchProbe"]
