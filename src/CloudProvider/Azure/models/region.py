# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Region model and per-region capability lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.errors import ResourceNotFoundError

if TYPE_CHECKING:
    from ..data._arm import _ARMClient

__all__ = ["Capability", "CAPABILITY_RESOURCE_TYPES", "Region", "RegionCapability"]


class Capability(str, Enum):
    """Fixed set of resource capabilities every region exposes."""

    HOSTS = "hosts"
    NETWORKS = "networks"
    STORAGES = "storages"
    STORAGE_CACHES = "storagecaches"


CAPABILITY_RESOURCE_TYPES: Dict[Capability, str] = {
    Capability.HOSTS: "Microsoft.Compute/virtualMachines",
    Capability.NETWORKS: "Microsoft.Network/virtualNetworks",
    Capability.STORAGES: "Microsoft.Storage/storageAccounts",
    Capability.STORAGE_CACHES: "Microsoft.Compute/images",
}


def _normalize_location(value: Optional[str]) -> str:
    return (value or "").replace(" ", "").lower()


@dataclass(frozen=True)
class Region:
    """
    One Azure location within a subscription.

    :param id: Location resource id (``/subscriptions/{s}/locations/{name}``).
    :type id: str
    :param name: Programmatic location name, e.g. ``"westeurope"``.
    :type name: str
    :param display_name: Human-readable name, e.g. ``"West Europe"``.
    :type display_name: str
    :param subscription_id: Subscription the location was enumerated from.
    :type subscription_id: str

    Example::

        region = client.subscriptions.get_region("westeurope")
        hosts = region.capability(Capability.HOSTS).list()
    """

    id: str
    name: str
    display_name: str = ""
    subscription_id: str = ""
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    _client: Optional["_ARMClient"] = field(default=None, repr=False, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], subscription_id: str = "", client: Optional["_ARMClient"] = None) -> "Region":
        metadata = data.get("metadata") or {}
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            display_name=data.get("displayName", ""),
            subscription_id=data.get("subscriptionId") or subscription_id,
            latitude=data.get("latitude") or metadata.get("latitude"),
            longitude=data.get("longitude") or metadata.get("longitude"),
            _client=client,
        )

    @property
    def global_id(self) -> str:
        return self.name

    @property
    def capabilities(self) -> frozenset:
        return frozenset(Capability)

    def capability(self, kind: Capability) -> "RegionCapability":
        """
        Return the accessor for one capability of this region.

        :raises ValueError: If ``kind`` is not a :class:`Capability`.
        :raises RuntimeError: If the region is not bound to a client.
        """
        kind = Capability(kind)
        if self._client is None:
            raise RuntimeError(f"Region {self.name!r} is not bound to a client")
        return RegionCapability(self, kind, self._client)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "subscription_id": self.subscription_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


class RegionCapability:
    """Resources of one capability (resource type) located in one region."""

    def __init__(self, region: Region, kind: Capability, client: "_ARMClient") -> None:
        self.region = region
        self.kind = kind
        self.resource_type = CAPABILITY_RESOURCE_TYPES[kind]
        self._client = client

    def _in_region(self, resource: Any) -> bool:
        return isinstance(resource, dict) and _normalize_location(resource.get("location")) == _normalize_location(
            self.region.name
        )

    def list(self) -> List[Dict[str, Any]]:
        """All resources of this capability's type whose location is the region."""
        return [r for r in self._client._list_all(self.resource_type) if self._in_region(r)]

    def get(self, resource_id: str) -> Dict[str, Any]:
        """
        Fetch one resource of this capability in this region.

        :raises ResourceNotFoundError: If the resource does not exist, has another
            type, or lives in another region.
        """
        if self.resource_type.lower() not in (resource_id or "").lower():
            raise ResourceNotFoundError(f"{resource_id} is not a {self.kind.value} resource", url=resource_id)
        resource = self._client._get(resource_id)
        if not self._in_region(resource):
            raise ResourceNotFoundError(f"{resource_id} is not in region {self.region.name}", url=resource_id)
        return resource

    def __repr__(self) -> str:
        return f"RegionCapability(region={self.region.name!r}, kind={self.kind.value!r})"
