# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Subscription and region enumeration namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core._error_codes import CONFIG_SUBSCRIPTION_MISSING
from ..core.errors import ConfigurationError, ResourceNotFoundError
from ..models.region import Region

if TYPE_CHECKING:
    from ..client import AzureClient


class SubscriptionOperations:
    """
    Scope discovery: subscriptions, regions and per-region catalogs.

    Accessed via ``client.subscriptions``. Regions are fetched on first use and
    cached until :meth:`~CloudProvider.Azure.client.AzureClient.update_account`.
    """

    def __init__(self, client: "AzureClient") -> None:
        self._client = client
        self._regions: Optional[List[Region]] = None

    def list(self) -> List[Dict[str, Any]]:
        """List the subscriptions visible to the credential."""
        with self._client._scoped_arm() as arm:
            return arm._list_subscriptions()

    def get_sub_accounts(self) -> Dict[str, Any]:
        """Subscriptions as ``{"total": n, "data": [...]}``."""
        subscriptions = self.list()
        return {"total": len(subscriptions), "data": subscriptions}

    def get_subscription_name(self) -> Optional[str]:
        """Display name of the client's subscription, if visible."""
        sid = self._client.subscription_id
        for subscription in self.list():
            if subscription.get("subscriptionId") == sid:
                return subscription.get("displayName")
        return None

    def list_regions(self, refresh: bool = False) -> List[Region]:
        """
        Locations of the client's subscription, cached after the first call.

        Without a subscription id there are no regions to enumerate.
        """
        if self._regions is not None and not refresh:
            return list(self._regions)
        sid = self._client.subscription_id
        if not sid:
            self._regions = []
            return []
        with self._client._scoped_arm() as arm:
            locations = arm._list("locations")
            self._regions = [Region.from_dict(loc, subscription_id=sid, client=arm) for loc in locations]
        return list(self._regions)

    def get_region(self, region_id: str) -> Region:
        """
        Region whose name is ``region_id``.

        :raises ResourceNotFoundError: If the subscription has no such region.
        """
        for region in self.list_regions():
            if region.name == region_id:
                return region
        raise ResourceNotFoundError(f"Region {region_id} not found")

    def get_region_by_global_id(self, global_id: str) -> Region:
        for region in self.list_regions():
            if region.global_id == global_id:
                return region
        raise ResourceNotFoundError(f"Region {global_id} not found")

    def get_default_region(self) -> Region:
        regions = self.list_regions()
        if not regions:
            raise ResourceNotFoundError("No regions available")
        return regions[0]

    def list_vm_sizes(self, location: str) -> List[Dict[str, Any]]:
        """Virtual machine sizes offered in ``location``."""
        sid = self._require_subscription()
        with self._client._scoped_arm() as arm:
            body = arm._get_path(f"/subscriptions/{sid}/providers/Microsoft.Compute/locations/{location}/vmSizes")
        return body.get("value", []) if isinstance(body, dict) else []

    def list_classic_disks(self) -> List[Dict[str, Any]]:
        """Classic (service management) disks of the subscription."""
        sid = self._require_subscription()
        with self._client._scoped_arm() as arm:
            body = arm._get_path(f"/subscriptions/{sid}/services/disks", api_version="2018-06-01")
        return body.get("value", []) if isinstance(body, dict) else []

    def _require_subscription(self) -> str:
        sid = self._client.subscription_id
        if not sid:
            raise ConfigurationError("need subscription id", subcode=CONFIG_SUBSCRIPTION_MISSING)
        return sid

    def _invalidate(self) -> None:
        self._regions = None
