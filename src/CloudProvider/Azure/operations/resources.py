# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Resource CRUD and action operations namespace."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from ..client import AzureClient


class ResourceOperations:
    """
    Resource CRUD, action and listing operations.

    Accessed via ``client.resources``. Write operations that start a
    long-running operation block until it is terminal; pass ``timeout`` (seconds)
    or a ``cancel`` :class:`threading.Event` to bound the wait.

    Example::

        disk = client.resources.create({
            "type": "Microsoft.Compute/disks",
            "name": "data-01",
            "location": "westeurope",
            "sku": {"name": "Standard_LRS"},
            "properties": {"creationData": {"createOption": "Empty"}, "diskSizeGB": 32},
        })
        client.resources.perform_action(vm_id, "powerOff", timeout=600)
        client.resources.delete(disk["id"])
    """

    def __init__(self, client: "AzureClient") -> None:
        self._client = client

    def get(self, resource_id: str) -> Dict[str, Any]:
        """
        Fetch one resource by id.

        :param resource_id: Full resource id.
        :type resource_id: str
        :return: Decoded resource.
        :rtype: dict
        :raises ResourceNotFoundError: If the resource does not exist.
        :raises ConfigurationError: If ``resource_id`` is empty.
        """
        with self._client._scoped_arm() as arm:
            return arm._get(resource_id)

    def list(self, global_resource: str = "") -> List[Dict[str, Any]]:
        """
        List a subscription-level collection such as ``"locations"``.

        Without a subscription this lists the subscriptions visible to the credential.
        """
        with self._client._scoped_arm() as arm:
            return arm._list(global_resource)

    def list_all(self, resource_type: str = "", resource_group: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        List every resource of a type in the subscription, optionally within one resource group.

        Follows ``nextLink`` continuation, so the result spans all pages in server order.

        :param resource_type: Resource type, e.g. ``"Microsoft.Compute/disks"``.
        :type resource_type: str
        :param resource_group: Restrict the listing to this resource group.
        :type resource_group: str or None
        :rtype: list[dict]
        :raises ConfigurationError: If the client has no subscription id.
        """
        with self._client._scoped_arm() as arm:
            return arm._list_all(resource_type, resource_group)

    def list_by_type(self, resource_type: str) -> List[Dict[str, Any]]:
        """List resources of a type in the type's default resource group."""
        with self._client._scoped_arm() as arm:
            return arm._list_by_type(resource_type)

    def create(
        self,
        body: Dict[str, Any],
        resource_group: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """
        Create a resource from a payload carrying ``type`` and ``name``.

        :param body: Resource payload.
        :type body: dict
        :param resource_group: Target resource group; defaults to the type's mapped group.
        :type resource_group: str or None
        :return: Decoded created resource (``{}`` when the operation reports no body).
        :rtype: dict
        :raises ConfigurationError: If the subscription, the type's resource group,
            ``type`` or ``name`` is missing.
        :raises AsyncOperationFailedError: If provisioning failed.
        """
        with self._client._scoped_arm() as arm:
            return arm._create(body, resource_group, timeout=timeout, cancel=cancel)

    def update(
        self,
        body: Dict[str, Any],
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Replace a resource with ``body``, addressed by its ``id`` field."""
        with self._client._scoped_arm() as arm:
            return arm._update(body, timeout=timeout, cancel=cancel)

    def delete(
        self,
        resource_id: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        """
        Delete a resource and wait for the deletion to finish.

        :raises ResourceNotFoundError: If the resource is already absent.
        """
        with self._client._scoped_arm() as arm:
            arm._delete(resource_id, timeout=timeout, cancel=cancel)

    def perform_action(
        self,
        resource_id: str,
        action: str,
        body: Any = None,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        """
        Invoke a resource action such as ``"start"`` or ``"deallocate"``.

        :raises AsyncOperationFailedError: If the action runs long and fails.
        """
        with self._client._scoped_arm() as arm:
            return arm._perform_action(resource_id, action, body, timeout=timeout, cancel=cancel)

    def check_name_availability(self, resource_type: str, body: Any) -> Dict[str, Any]:
        """
        Ask the provider whether a name is free, e.g. for storage accounts.

        :raises ConfigurationError: If the client has no subscription id.
        """
        with self._client._scoped_arm() as arm:
            return arm._check_name_availability(resource_type, body)
