# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request construction for Resource Manager operations.

:func:`build_request` turns an :class:`OperationKind` and a
:class:`~CloudProvider.Azure.models.resource.ResourceReference` into a
:class:`RequestDescriptor` (method, absolute URL with ``api-version``, body).
Every precondition is checked here so configuration mistakes fail before any
network call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from ..core._error_codes import (
    CONFIG_FIELD_MISSING,
    CONFIG_RESOURCE_GROUP_MISSING,
    CONFIG_RESOURCE_ID_MISSING,
    CONFIG_SUBSCRIPTION_MISSING,
)
from ..core.errors import ConfigurationError
from ..models.resource import ResourceReference
from ._versions import VersionTable


class OperationKind(str, Enum):
    GET = "get"
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ACTION = "action"
    CHECK_NAME_AVAILABILITY = "check_name_availability"


_METHODS = {
    OperationKind.GET: "GET",
    OperationKind.LIST: "GET",
    OperationKind.CREATE: "PUT",
    OperationKind.UPDATE: "PUT",
    OperationKind.DELETE: "DELETE",
    OperationKind.ACTION: "POST",
    OperationKind.CHECK_NAME_AVAILABILITY: "POST",
}


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    body: Any = None
    api_version: str = ""


def with_api_version(base_url: str, path: str, version: str) -> str:
    """Join ``base_url`` and ``path`` and append the ``api-version`` query parameter."""
    sep = "&" if "?" in path else "?"
    return f"{base_url}{path}{sep}api-version={version}"


def _require_subscription(kind: OperationKind, ref: ResourceReference) -> str:
    if not ref.subscription_id:
        raise ConfigurationError(
            f"Missing subscription id for {kind.value} {ref.resource_type or ''}".rstrip(),
            subcode=CONFIG_SUBSCRIPTION_MISSING,
        )
    return ref.subscription_id


def _require_resource_id(kind: OperationKind, ref: ResourceReference) -> str:
    if not ref.resource_id:
        raise ConfigurationError(f"{kind.value} requires a resource id", subcode=CONFIG_RESOURCE_ID_MISSING)
    return ref.resource_id


def _require_resource_group(
    kind: OperationKind, ref: ResourceReference, resource_groups: Mapping[str, str]
) -> str:
    if not ref.resource_type:
        raise ConfigurationError(
            f"{kind.value} requires a resource type", subcode=CONFIG_FIELD_MISSING, details={"field": "type"}
        )
    group = resource_groups.get(ref.resource_type)
    if not group:
        raise ConfigurationError(
            f"{kind.value.capitalize()} {ref.resource_type} missing resourceGroupName",
            subcode=CONFIG_RESOURCE_GROUP_MISSING,
            details={"resource_type": ref.resource_type},
        )
    return group


def build_request(
    kind: OperationKind,
    ref: ResourceReference,
    *,
    base_url: str,
    versions: VersionTable,
    resource_groups: Mapping[str, str],
    body: Any = None,
    action: Optional[str] = None,
) -> RequestDescriptor:
    """
    Assemble the request for one operation.

    :param kind: Operation to perform.
    :type kind: OperationKind
    :param ref: Target resource.
    :type ref: ~CloudProvider.Azure.models.resource.ResourceReference
    :param base_url: Resource Manager endpoint without trailing slash.
    :type base_url: str
    :param versions: api-version table.
    :type versions: VersionTable
    :param resource_groups: Resource type to default resource group table.
    :type resource_groups: Mapping[str, str]
    :param body: JSON-serializable payload for PUT/POST operations.
    :param action: Action name for :attr:`OperationKind.ACTION`.
    :type action: str or None
    :return: The request descriptor.
    :rtype: RequestDescriptor
    :raises ConfigurationError: If a precondition of the operation is not met.
    """
    if kind in (OperationKind.GET, OperationKind.DELETE):
        path = _require_resource_id(kind, ref)
        version = versions.resolve(path)
    elif kind is OperationKind.UPDATE:
        path = _require_resource_id(kind, ref)
        _require_resource_group(kind, ref, resource_groups)
        version = versions.resolve(path)
    elif kind is OperationKind.ACTION:
        rid = _require_resource_id(kind, ref)
        if not action:
            raise ConfigurationError("action requires an action name", subcode=CONFIG_FIELD_MISSING)
        version = versions.resolve(rid)
        path = f"{rid.rstrip('/')}/{action.lstrip('/')}"
    elif kind is OperationKind.LIST:
        sub = _require_subscription(kind, ref)
        path = f"/subscriptions/{sub}"
        if ref.resource_group:
            path += f"/resourceGroups/{ref.resource_group}"
        if ref.resource_type:
            path += f"/providers/{ref.resource_type}"
        version = versions.resolve(ref.resource_type) if ref.resource_type else versions.default
    elif kind is OperationKind.CREATE:
        sub = _require_subscription(kind, ref)
        group = ref.resource_group or _require_resource_group(kind, ref, resource_groups)
        if not ref.resource_type:
            raise ConfigurationError(
                "create requires a resource type", subcode=CONFIG_FIELD_MISSING, details={"field": "type"}
            )
        if not ref.name:
            raise ConfigurationError(
                f"Create {ref.resource_type} error: Missing name params",
                subcode=CONFIG_FIELD_MISSING,
                details={"field": "name"},
            )
        path = f"/subscriptions/{sub}/resourceGroups/{group}/providers/{ref.resource_type}/{ref.name}"
        version = versions.resolve(ref.resource_type)
    elif kind is OperationKind.CHECK_NAME_AVAILABILITY:
        sub = _require_subscription(kind, ref)
        if not ref.resource_type:
            raise ConfigurationError(
                "checkNameAvailability requires a resource type",
                subcode=CONFIG_FIELD_MISSING,
                details={"field": "type"},
            )
        path = f"/subscriptions/{sub}/providers/{ref.resource_type}/checkNameAvailability"
        version = versions.resolve(path)
    else:  # pragma: no cover
        raise ValueError(f"Unsupported operation kind: {kind!r}")

    return RequestDescriptor(
        method=_METHODS[kind],
        url=with_api_version(base_url, path, version),
        body=body,
        api_version=version,
    )
