# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level Resource Manager client: request execution, operation tracking and listing."""

from __future__ import annotations

import contextvars
import json
import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import requests

from ..common.constants import (
    CONTENT_TYPE_JSON,
    HEADER_CLIENT_REQUEST_ID,
    HEADER_CORRELATION_REQUEST_ID,
)
from ..core._auth import _AuthManager
from ..core._error_codes import CONFIG_RESOURCE_GROUP_MISSING, DECODE_UNEXPECTED_SHAPE
from ..core._http import _HttpClient
from ..core.config import AzureConfig, AzureEnvironment
from ..core.errors import ConfigurationError, DecodeError
from ..models.resource import ResourceReference
from ._decode import decode_response, raise_for_not_found
from ._poller import _AsyncOperationTracker
from ._request import OperationKind, RequestDescriptor, build_request, with_api_version
from ._versions import VersionTable

_logger = logging.getLogger(__name__)

_CALL_SCOPE: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("_azure_call_scope", default=None)


class _ARMClient:
    """
    Resource Manager client: builds requests, sends them, tracks long-running
    operations and decodes results.

    :param auth: Token provider.
    :type auth: ~CloudProvider.Azure.core._auth._AuthManager
    :param environment: Cloud endpoints.
    :type environment: ~CloudProvider.Azure.core.config.AzureEnvironment
    :param config: Client configuration.
    :type config: ~CloudProvider.Azure.core.config.AzureConfig or None
    :param subscription_id: Default subscription for subscription-scoped calls.
    :type subscription_id: str or None
    :param session: Optional requests.Session for connection pooling.
    :type session: requests.Session or None
    """

    def __init__(
        self,
        auth: _AuthManager,
        environment: AzureEnvironment,
        config: Optional[AzureConfig] = None,
        subscription_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.environment = environment
        self.base_url = environment.base_url
        self.config = config or AzureConfig.from_env()
        self.subscription_id = subscription_id or ""
        self.versions = VersionTable(self.config.api_versions, default=self.config.default_api_version)
        self.resource_groups = self.config.resource_groups
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._tracker = _AsyncOperationTracker(
            self._poll,
            interval=self.config.poll_interval,
            retries=self.config.poll_retries,
            backoff=self.config.poll_backoff,
            max_backoff=self.config.poll_max_backoff,
            jitter=self.config.poll_jitter,
        )

    def close(self) -> None:
        self._http.close()

    # ----------------------------- plumbing -----------------------------

    @contextmanager
    def _call_scope(self) -> Iterator[str]:
        """Share one correlation id across every request issued inside the block."""
        existing = _CALL_SCOPE.get()
        if existing is not None:
            yield existing
            return
        token = _CALL_SCOPE.set(str(uuid.uuid4()))
        try:
            yield _CALL_SCOPE.get()
        finally:
            _CALL_SCOPE.reset(token)

    def _headers(self, with_body: bool = False) -> Dict[str, str]:
        token = self.auth._acquire_token(self.environment.scope).access_token
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            HEADER_CLIENT_REQUEST_ID: str(uuid.uuid4()),
        }
        correlation_id = _CALL_SCOPE.get()
        if correlation_id is not None:
            headers[HEADER_CORRELATION_REQUEST_ID] = correlation_id
        if with_body:
            headers["Content-Type"] = CONTENT_TYPE_JSON
        return headers

    def _request(self, method: str, url: str, body: Any = None) -> Any:
        data = None
        if body is not None:
            data = body if isinstance(body, (str, bytes)) else json.dumps(body)
        if isinstance(data, str) and not data:
            data = None
        return self._http._request(method.lower(), url, headers=self._headers(with_body=data is not None), data=data)

    def _poll(self, url: str) -> Any:
        return self._request("get", url)

    def _execute(
        self,
        request: RequestDescriptor,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        """
        Send ``request``, follow any long-running operation and decode the result.

        :raises ResourceNotFoundError: On HTTP 404.
        :raises AsyncOperationFailedError: If a tracked operation failed.
        """
        response = self._request(request.method, request.url, request.body)
        raise_for_not_found(response, request.url)
        handle = self._tracker.detect(response)
        if handle is not None:
            if timeout is None:
                timeout = self.config.poll_timeout
            return self._tracker.wait(handle, timeout=timeout, cancel=cancel)
        return decode_response(response)

    def _build(self, kind: OperationKind, ref: ResourceReference, **kwargs: Any) -> RequestDescriptor:
        return build_request(
            kind,
            ref,
            base_url=self.base_url,
            versions=self.versions,
            resource_groups=self.resource_groups,
            **kwargs,
        )

    def _subscription_ref(self, resource_type: str = "", resource_group: Optional[str] = None) -> ResourceReference:
        return ResourceReference(
            resource_type=resource_type,
            subscription_id=self.subscription_id,
            resource_group=resource_group,
        )

    # ----------------------------- CRUD ---------------------------------

    def _get(self, resource_id: str) -> Any:
        ref = ResourceReference.from_id(resource_id)
        return self._execute(self._build(OperationKind.GET, ref))

    def _create(
        self,
        body: Dict[str, Any],
        resource_group: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        ref = ResourceReference(
            resource_type=body.get("type") or "",
            subscription_id=self.subscription_id,
            resource_group=resource_group,
            name=body.get("name") or "",
        )
        return self._execute(self._build(OperationKind.CREATE, ref, body=body), timeout=timeout, cancel=cancel)

    def _update(
        self,
        body: Dict[str, Any],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        ref = ResourceReference.from_body(body, subscription_id=self.subscription_id)
        return self._execute(self._build(OperationKind.UPDATE, ref, body=body), timeout=timeout, cancel=cancel)

    def _delete(
        self,
        resource_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        ref = ResourceReference.from_id(resource_id)
        self._execute(self._build(OperationKind.DELETE, ref), timeout=timeout, cancel=cancel)
        return None

    def _perform_action(
        self,
        resource_id: str,
        action: str,
        body: Any = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        ref = ResourceReference.from_id(resource_id)
        request = self._build(OperationKind.ACTION, ref, body=body, action=action)
        return self._execute(request, timeout=timeout, cancel=cancel)

    def _check_name_availability(self, resource_type: str, body: Any) -> Any:
        ref = self._subscription_ref(resource_type)
        return self._execute(self._build(OperationKind.CHECK_NAME_AVAILABILITY, ref, body=body))

    # ----------------------------- listing ------------------------------

    def _iter_pages(self, url: str) -> Iterator[List[Any]]:
        """
        Yield the ``value`` array of each page, following ``nextLink``.

        :raises DecodeError: If a page is not a ``{"value": [...]}`` envelope.
        """
        next_link: Optional[str] = url
        while next_link:
            body = self._execute(RequestDescriptor(method="GET", url=next_link))
            if not isinstance(body, dict):
                raise DecodeError(
                    "Listing response is not a JSON object",
                    subcode=DECODE_UNEXPECTED_SHAPE,
                    details={"url": next_link},
                )
            items = body.get("value", [])
            if not isinstance(items, list):
                raise DecodeError(
                    "Listing response 'value' is not an array",
                    subcode=DECODE_UNEXPECTED_SHAPE,
                    details={"url": next_link},
                )
            yield items
            next_link = body.get("nextLink") or body.get("@odata.nextLink")

    def _collect(self, url: str) -> List[Any]:
        out: List[Any] = []
        for page in self._iter_pages(url):
            out.extend(page)
        return out

    def _list_all(self, resource_type: str = "", resource_group: Optional[str] = None) -> List[Any]:
        request = self._build(OperationKind.LIST, self._subscription_ref(resource_type, resource_group))
        return self._collect(request.url)

    def _list_by_type(self, resource_type: str) -> List[Any]:
        self._build(OperationKind.LIST, self._subscription_ref(resource_type))
        group = self.resource_groups.get(resource_type) if resource_type else None
        if not group:
            raise ConfigurationError(
                f"Not find default resourceGroup for {resource_type}",
                subcode=CONFIG_RESOURCE_GROUP_MISSING,
                details={"resource_type": resource_type},
            )
        request = self._build(OperationKind.LIST, self._subscription_ref(resource_type, group))
        return self._collect(request.url)

    def _list(self, global_resource: str = "") -> List[Any]:
        """List ``/subscriptions/{id}/{global_resource}`` (e.g. ``locations``) with the default version."""
        path = "/subscriptions"
        if self.subscription_id:
            path += f"/{self.subscription_id}"
            if global_resource:
                path += f"/{global_resource.lstrip('/')}"
        return self._collect(with_api_version(self.base_url, path, self.versions.default))

    def _list_subscriptions(self) -> List[Any]:
        return self._collect(with_api_version(self.base_url, "/subscriptions", self.versions.default))

    def _get_path(self, path: str, api_version: Optional[str] = None) -> Any:
        version = api_version or self.versions.resolve(path)
        return self._execute(RequestDescriptor(method="GET", url=with_api_version(self.base_url, path, version)))
