# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error hierarchy for the Azure Resource Manager client.

Every failure raised by this package derives from :class:`AzureError` and carries
an :class:`ErrorKind` classification so callers can branch on the failure mode
without string matching.
"""

from __future__ import annotations

import datetime as _dt
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Classification of an :class:`AzureError`."""

    NOT_FOUND = "NotFound"
    UNAUTHORIZED = "Unauthorized"
    CONFIGURATION = "Configuration"
    ASYNC_FAILED = "AsyncFailed"
    TRANSPORT = "Transport"
    DECODE = "Decode"
    CANCELLED = "Cancelled"


class AzureError(Exception):
    """Base structured error for the Azure Resource Manager client."""

    kind: ErrorKind = ErrorKind.DECODE

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "kind": self.kind.value,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ResourceNotFoundError(AzureError):
    """The addressed resource does not exist (HTTP 404)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, *, url: Optional[str] = None, body_excerpt: Optional[str] = None) -> None:
        details: Dict[str, Any] = {}
        if url is not None:
            details["url"] = url
        if body_excerpt:
            details["body_excerpt"] = body_excerpt
        super().__init__(message, code="not_found", subcode="http_404", status_code=404, details=details, source="server")


class UnauthorizedError(AzureError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str, *, subcode: Optional[str] = None) -> None:
        super().__init__(message, code="unauthorized", subcode=subcode, source="client")


class ConfigurationError(AzureError):
    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="configuration_error", subcode=subcode, details=details, source="client")


class TransportError(AzureError):
    """Connection, TLS or timeout failure; no HTTP response was received."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, *, method: Optional[str] = None, url: Optional[str] = None) -> None:
        details: Dict[str, Any] = {}
        if method is not None:
            details["method"] = method
        if url is not None:
            details["url"] = url
        super().__init__(message, code="transport_error", details=details, source="client", is_transient=True)


class DecodeError(AzureError):
    kind = ErrorKind.DECODE

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        code: str = "decode_error",
    ) -> None:
        super().__init__(message, code=code, subcode=subcode, status_code=status_code, details=details, source="server")


class ServiceError(DecodeError):
    """The service answered with an ``error`` payload or a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        subcode: Optional[str] = None,
        payload: Any = None,
        service_error_code: Optional[str] = None,
        request_id: Optional[str] = None,
        correlation_id: Optional[str] = None,
        body_excerpt: Optional[str] = None,
    ) -> None:
        d: Dict[str, Any] = {}
        if payload is not None:
            d["payload"] = payload
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if request_id is not None:
            d["request_id"] = request_id
        if correlation_id is not None:
            d["correlation_id"] = correlation_id
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(message, code="service_error", subcode=subcode, status_code=status_code, details=d)
        self.payload = payload


class AsyncOperationFailedError(AzureError):
    """A tracked long-running operation reached a terminal non-success state."""

    kind = ErrorKind.ASYNC_FAILED

    def __init__(
        self,
        message: str,
        *,
        poll_url: str,
        payload: Any = None,
        body: Optional[str] = None,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
    ) -> None:
        d: Dict[str, Any] = {"poll_url": poll_url}
        if payload is not None:
            d["payload"] = payload
        if body is not None:
            d["body"] = body
        super().__init__(message, code="async_failed", subcode=subcode, status_code=status_code, details=d, source="server")
        self.payload = payload


class OperationCancelledError(AzureError):
    """Polling was abandoned client-side; the remote operation keeps running."""

    kind = ErrorKind.CANCELLED

    def __init__(self, message: str, *, poll_url: str, polls: int = 0, code: str = "cancelled", subcode: Optional[str] = None):
        super().__init__(
            message,
            code=code,
            subcode=subcode,
            details={"poll_url": poll_url, "polls": polls},
            source="client",
        )
        self.poll_url = poll_url


class OperationTimeoutError(OperationCancelledError):
    def __init__(self, message: str, *, poll_url: str, polls: int = 0, subcode: Optional[str] = None):
        super().__init__(message, poll_url=poll_url, polls=polls, code="timeout", subcode=subcode)


__all__ = [
    "ErrorKind",
    "AzureError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "ServiceError",
    "AsyncOperationFailedError",
    "OperationCancelledError",
    "OperationTimeoutError",
]
