# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with timeout handling and optional session support.

This module provides :class:`~CloudProvider.Azure.core._http._HttpClient`, a thin
wrapper around the requests library. It performs exactly one round trip per call
and converts network failures into :class:`~CloudProvider.Azure.core.errors.TransportError`.
Retry policy belongs to the long-running operation tracker, not to this layer.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .errors import TransportError

_logger = logging.getLogger(__name__)


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling. If provided,
        all requests use this session for efficient connection reuse.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        Applies default timeouts based on HTTP method (120s for writes, 10s for reads).
        When a session is configured, uses the session for connection pooling;
        otherwise uses standalone requests.

        :param method: HTTP method (GET, POST, PUT, DELETE, etc.).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, data, etc.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises TransportError: On connection, TLS or timeout failures.
        """
        if "timeout" not in kwargs:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "put", "patch", "delete") else 10

        _logger.debug("%s %s", method.upper(), url)
        try:
            if self._session is not None:
                return self._session.request(method, url, **kwargs)
            return requests.request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"{method.upper()} {url} failed: {exc}", method=method.upper(), url=url) from exc

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
