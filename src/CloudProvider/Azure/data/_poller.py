# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Long-running operation tracking.

Resource Manager answers slow writes with a ``Location`` or
``Azure-AsyncOperation`` header. :class:`_AsyncOperationTracker` recognizes such
responses and polls the advertised URL until the operation is terminal:

- ``202`` keeps polling after the poll interval.
- An empty body on any other status means success with an empty result.
- With ``Azure-AsyncOperation``, a ``status`` of ``InProgress`` keeps polling,
  ``Succeeded`` ends with an empty result and anything else fails.
- A body without ``status`` is the final result.

Waiting is bounded by an optional deadline and can be abandoned through a
:class:`threading.Event`. Transient poll failures are retried with backoff.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..common.constants import (
    ASYNC_STATUS_IN_PROGRESS,
    ASYNC_STATUS_SUCCEEDED,
    HEADER_ASYNC_OPERATION,
    HEADER_LOCATION,
    HEADER_RETRY_AFTER,
    TRANSIENT_STATUS_CODES,
)
from ..core._error_codes import (
    ASYNC_CANCELLED,
    ASYNC_DEADLINE_EXCEEDED,
    ASYNC_POLL_HTTP_ERROR,
    ASYNC_STATUS_FAILED,
)
from ..core.errors import (
    AsyncOperationFailedError,
    DecodeError,
    OperationCancelledError,
    OperationTimeoutError,
    TransportError,
)
from ._decode import _body_text, parse_body

_logger = logging.getLogger(__name__)


class OperationStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


@dataclass
class OperationHandle:
    """
    State of one tracked long-running operation.

    :param poll_url: Absolute URL polled for the operation status.
    :type poll_url: str
    :param source_header: Header the poll URL came from (``Location`` or ``Azure-AsyncOperation``).
    :type source_header: str
    """

    poll_url: str
    source_header: str
    status: OperationStatus = OperationStatus.PENDING
    polls: int = 0

    @property
    def uses_async_header(self) -> bool:
        return self.source_header == HEADER_ASYNC_OPERATION

    @property
    def is_terminal(self) -> bool:
        return self.status in (OperationStatus.SUCCEEDED, OperationStatus.FAILED)


class _AsyncOperationTracker:
    """
    Drives long-running operations to a terminal state.

    :param send: Callable issuing one authorized ``GET`` to an absolute URL and
        returning the response. It may raise :class:`TransportError`.
    :param interval: Seconds between polls of an unfinished operation.
    :param retries: Retries of a single poll that failed transiently.
    :param backoff: Base delay for exponential backoff between poll retries.
    :param max_backoff: Cap for any single wait, including ``Retry-After``.
    :param jitter: Add +-25% jitter to retry delays.
    """

    def __init__(
        self,
        send: Callable[[str], Any],
        *,
        interval: float = 5.0,
        retries: int = 3,
        backoff: float = 0.5,
        max_backoff: float = 60.0,
        jitter: bool = True,
    ) -> None:
        self._send = send
        self.interval = interval
        self.retries = max(0, retries)
        self.backoff = backoff
        self.max_backoff = max_backoff
        self.jitter = jitter

    @staticmethod
    def detect(response: Any) -> Optional[OperationHandle]:
        """
        Return a handle when ``response`` starts a long-running operation.

        A ``Location`` header always starts polling; ``Azure-AsyncOperation``
        does unless the status is ``200``. When both are present the
        ``Azure-AsyncOperation`` URL is polled.
        """
        headers = getattr(response, "headers", None) or {}
        location = headers.get(HEADER_LOCATION) or ""
        async_operation = headers.get(HEADER_ASYNC_OPERATION) or ""
        if not (location or (async_operation and response.status_code != 200)):
            return None
        if async_operation:
            return OperationHandle(poll_url=async_operation, source_header=HEADER_ASYNC_OPERATION)
        return OperationHandle(poll_url=location, source_header=HEADER_LOCATION)

    def wait(
        self,
        handle: OperationHandle,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        """
        Poll until the operation is terminal.

        :param handle: Operation returned by :meth:`detect`.
        :type handle: OperationHandle
        :param timeout: Seconds after which waiting is abandoned. ``None`` waits indefinitely.
        :type timeout: float or None
        :param cancel: Event that abandons the wait when set.
        :type cancel: threading.Event or None
        :return: The final payload, or ``{}``.
        :raises AsyncOperationFailedError: If the operation failed.
        :raises OperationTimeoutError: If ``timeout`` elapsed.
        :raises OperationCancelledError: If ``cancel`` was set.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        handle.status = OperationStatus.IN_PROGRESS
        _logger.debug("tracking operation %s (%s)", handle.poll_url, handle.source_header)
        while True:
            self._check_abort(handle, deadline, cancel, 0.0)
            response = self._poll_once(handle, deadline, cancel)
            status_code = response.status_code
            if status_code == 202:
                self._pause(handle, self._interval_for(response), deadline, cancel)
                continue

            text = _body_text(response)
            if status_code >= 400:
                handle.status = OperationStatus.FAILED
                raise AsyncOperationFailedError(
                    f"Operation {handle.poll_url} failed with HTTP {status_code}: {text}",
                    poll_url=handle.poll_url,
                    payload=self._try_parse(text),
                    body=text,
                    status_code=status_code,
                    subcode=ASYNC_POLL_HTTP_ERROR,
                )
            if not text.strip():
                handle.status = OperationStatus.SUCCEEDED
                return {}

            payload = parse_body(text, status_code=status_code)
            if handle.uses_async_header and isinstance(payload, dict) and "status" in payload:
                status = payload.get("status")
                if status == ASYNC_STATUS_IN_PROGRESS:
                    self._pause(handle, self._interval_for(response), deadline, cancel)
                    continue
                if status == ASYNC_STATUS_SUCCEEDED:
                    handle.status = OperationStatus.SUCCEEDED
                    return {}
                handle.status = OperationStatus.FAILED
                raise AsyncOperationFailedError(
                    f"Operation {handle.poll_url} failed: {text}",
                    poll_url=handle.poll_url,
                    payload=payload,
                    body=text,
                    status_code=status_code,
                    subcode=ASYNC_STATUS_FAILED,
                )
            handle.status = OperationStatus.SUCCEEDED
            return payload

    # --- internals ---

    def _poll_once(self, handle: OperationHandle, deadline: Optional[float], cancel: Optional[threading.Event]) -> Any:
        for attempt in range(self.retries + 1):
            handle.polls += 1
            try:
                response = self._send(handle.poll_url)
            except TransportError as exc:
                if attempt == self.retries:
                    raise
                _logger.warning("poll of %s failed (%s), retrying", handle.poll_url, exc.message)
                self._pause(handle, self._retry_delay(attempt), deadline, cancel)
                continue
            if response.status_code in TRANSIENT_STATUS_CODES and attempt < self.retries:
                _logger.warning("poll of %s returned HTTP %s, retrying", handle.poll_url, response.status_code)
                self._pause(handle, self._retry_delay(attempt, response), deadline, cancel)
                continue
            return response
        raise AssertionError("unreachable")  # pragma: no cover

    def _interval_for(self, response: Any) -> float:
        retry_after = self._retry_after(response)
        if retry_after is not None:
            return retry_after
        return self.interval

    def _retry_after(self, response: Any) -> Optional[float]:
        headers = getattr(response, "headers", None) or {}
        if HEADER_RETRY_AFTER not in headers:
            return None
        try:
            return min(float(int(headers[HEADER_RETRY_AFTER])), self.max_backoff)
        except (ValueError, TypeError):
            return None

    def _retry_delay(self, attempt: int, response: Any = None) -> float:
        """Exponential backoff, preferring a server ``Retry-After``, with optional +-25% jitter."""
        if response is not None:
            retry_after = self._retry_after(response)
            if retry_after is not None:
                return retry_after
        delay = min(self.backoff * (2**attempt), self.max_backoff)
        if self.jitter:
            jitter_range = delay * 0.25
            delay = max(0.0, delay + random.uniform(-jitter_range, jitter_range))
        return delay

    def _check_abort(
        self,
        handle: OperationHandle,
        deadline: Optional[float],
        cancel: Optional[threading.Event],
        upcoming: float,
    ) -> None:
        if cancel is not None and cancel.is_set():
            raise OperationCancelledError(
                f"Stopped waiting for operation {handle.poll_url}",
                poll_url=handle.poll_url,
                polls=handle.polls,
                subcode=ASYNC_CANCELLED,
            )
        if deadline is not None and time.monotonic() + upcoming > deadline:
            raise OperationTimeoutError(
                f"Operation {handle.poll_url} did not finish before the deadline",
                poll_url=handle.poll_url,
                polls=handle.polls,
                subcode=ASYNC_DEADLINE_EXCEEDED,
            )

    def _pause(
        self,
        handle: OperationHandle,
        delay: float,
        deadline: Optional[float],
        cancel: Optional[threading.Event],
    ) -> None:
        self._check_abort(handle, deadline, cancel, delay)
        if cancel is not None:
            if cancel.wait(delay):
                self._check_abort(handle, deadline, cancel, 0.0)
        else:
            time.sleep(delay)

    @staticmethod
    def _try_parse(text: str) -> Any:
        if not text.strip():
            return None
        try:
            return parse_body(text)
        except DecodeError:
            return None
