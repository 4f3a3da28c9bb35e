"""JSON-over-HTTP fetcher used by the provider implementations.

The flow engine only depends on the :class:`FetchJSON` call signature::

    fetch(url, method="GET", headers=None, params=None, data=None) -> dict

Hosts may pass any callable that honours it (for example a wrapper around
their own HTTP helper). :class:`JSONFetcher` is the default implementation,
built on :class:`httpx.Client`. Every failure -- transport error, non-2xx
status, or a body that is not a JSON object -- is raised as
:class:`~wish.exceptions.NetworkError`. There is no retry.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from wish.exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class FetchJSON(Protocol):
    """Call signature of the HTTP collaborator."""

    def __call__(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        data: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]: ...


def _redact(url: str) -> str:
    """Drop the query string, which may carry ``client_secret`` or tokens."""
    return url.split("?", 1)[0]


class JSONFetcher:
    """Blocking JSON fetcher backed by :class:`httpx.Client`.

    The underlying client is created on first use (or on ``__enter__``) and
    reused until :meth:`close`.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.
        headers: Headers sent with every request (``User-Agent`` etc.).

    Example::

        with JSONFetcher() as fetch:
            user = fetch("https://api.github.com/user",
                         headers={"Authorization": "token ..."})
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._headers = dict(headers or {})
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> JSONFetcher:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client, if open."""
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                headers=self._headers,
                follow_redirects=True,
            )
        return self._client

    # ------------------------------------------------------------------ #
    # Fetch
    # ------------------------------------------------------------------ #

    def __call__(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        data: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object.

        Args:
            url: Absolute request URL. May already carry a query string;
                *params* are appended to it.
            method: HTTP method.
            headers: Request headers.
            params: Extra query parameters.
            data: Form fields, sent as ``application/x-www-form-urlencoded``.

        Returns:
            The response body as a ``dict``.

        Raises:
            NetworkError: On transport failure, a non-2xx status, or a body
                that is not a JSON object.
        """
        client = self._ensure_client()
        logger.debug("%s %s", method, _redact(url))

        # httpx replaces an existing query string when given params=.
        if params:
            url = str(httpx.URL(url).copy_merge_params(params))
        kwargs: dict[str, Any] = {"headers": headers or {}}
        if data is not None:
            kwargs["data"] = data

        try:
            response = client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NetworkError(
                f"{method} {_redact(url)} failed with status {status}: "
                f"{exc.response.text[:200]}",
                status_code=status,
                url=_redact(url),
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"{method} {_redact(url)} failed: {exc}", url=_redact(url)
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"{method} {_redact(url)} returned malformed JSON",
                status_code=response.status_code,
                url=_redact(url),
            ) from exc
        if not isinstance(body, dict):
            raise NetworkError(
                f"{method} {_redact(url)} returned {type(body).__name__}, expected a JSON object",
                status_code=response.status_code,
                url=_redact(url),
            )
        return body
