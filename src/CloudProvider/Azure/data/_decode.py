# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Response body decoding and error normalization."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..common.constants import HEADER_CORRELATION_REQUEST_ID, HEADER_REQUEST_ID
from ..core._error_codes import DECODE_ERROR_PAYLOAD, DECODE_INVALID_JSON, _http_subcode
from ..core.errors import DecodeError, ResourceNotFoundError, ServiceError

_logger = logging.getLogger(__name__)

_EXCERPT_LIMIT = 200


def _body_text(response: Any) -> str:
    text = getattr(response, "text", None)
    if text is None:
        content = getattr(response, "content", b"") or b""
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else str(content)
    return text or ""


def parse_body(text: str, *, status_code: Optional[int] = None) -> Any:
    """
    Parse a JSON body after stripping carriage returns.

    :raises DecodeError: If the text is not valid JSON.
    """
    cleaned = text.replace("\r", "")
    try:
        return json.loads(cleaned)
    except ValueError as exc:
        raise DecodeError(
            f"Response body is not valid JSON: {exc}",
            subcode=DECODE_INVALID_JSON,
            status_code=status_code,
            details={"body_excerpt": cleaned[:_EXCERPT_LIMIT]},
        ) from exc


def _service_error(response: Any, payload: Any, text: str) -> ServiceError:
    status = getattr(response, "status_code", 0) or 0
    headers = getattr(response, "headers", {}) or {}
    service_code = None
    message = text
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        err = payload["error"]
        service_code = err.get("code")
    elif payload is None:
        message = f"HTTP {status}"
    return ServiceError(
        message,
        status_code=status,
        subcode=_http_subcode(status) if status >= 400 else DECODE_ERROR_PAYLOAD,
        payload=payload,
        service_error_code=service_code,
        request_id=headers.get(HEADER_REQUEST_ID),
        correlation_id=headers.get(HEADER_CORRELATION_REQUEST_ID),
        body_excerpt=text[:_EXCERPT_LIMIT] if text else None,
    )


def raise_for_not_found(response: Any, url: str) -> None:
    """Raise :class:`ResourceNotFoundError` when ``response`` is a 404."""
    if getattr(response, "status_code", None) != 404:
        return
    text = _body_text(response)
    _logger.error("failed find %s error: %s", url, text)
    raise ResourceNotFoundError(f"Resource not found: {url}", url=url, body_excerpt=text[:_EXCERPT_LIMIT])


def decode_response(response: Any) -> Any:
    """
    Decode a completed (non-polling) response.

    An empty body decodes to ``{}``. A payload with a top-level ``error`` field,
    or any status of 400 and above, raises :class:`ServiceError`.

    :param response: HTTP response.
    :return: Parsed JSON value.
    :raises DecodeError: On malformed JSON.
    :raises ServiceError: On error payloads.
    """
    status = getattr(response, "status_code", 200) or 200
    text = _body_text(response)
    if not text.strip():
        if status >= 400:
            raise _service_error(response, None, text)
        return {}
    try:
        payload = parse_body(text, status_code=status)
    except DecodeError:
        if status >= 400:
            raise _service_error(response, None, text)
        raise
    if (isinstance(payload, dict) and "error" in payload) or status >= 400:
        raise _service_error(response, payload, text.replace("\r", ""))
    return payload
