# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from unittest.mock import MagicMock

import pytest
from azure.core.credentials import TokenCredential

from CloudProvider.Azure.client import AzureClient
from CloudProvider.Azure.core.errors import ConfigurationError, ResourceNotFoundError
from CloudProvider.Azure.models.region import Capability
from tests.unit.test_helpers import BASE_URL, SUBSCRIPTION_ID, TestableClient

SECRET = "client-1/s3cret"

LOCATIONS = {
    "value": [
        {"id": f"/subscriptions/{SUBSCRIPTION_ID}/locations/westeurope", "name": "westeurope", "displayName": "West Europe"},
        {"id": f"/subscriptions/{SUBSCRIPTION_ID}/locations/eastus", "name": "eastus", "displayName": "East US"},
    ]
}
SUBSCRIPTIONS = {
    "value": [
        {"subscriptionId": "other", "displayName": "Other"},
        {"subscriptionId": SUBSCRIPTION_ID, "displayName": "Production"},
    ]
}


def make_client(responses, access_key=f"tenant-1/{SUBSCRIPTION_ID}"):
    client = AzureClient(access_key, SECRET, credential=MagicMock(spec=TokenCredential))
    client._arm = TestableClient(responses, subscription_id=client.subscription_id)
    return client


def test_list_subscriptions():
    client = make_client([(200, {}, SUBSCRIPTIONS)])
    assert client.subscriptions.list() == SUBSCRIPTIONS["value"]
    assert client._arm._http.urls == [f"{BASE_URL}/subscriptions?api-version=2016-02-01"]


def test_get_sub_accounts():
    client = make_client([(200, {}, SUBSCRIPTIONS)])
    accounts = client.subscriptions.get_sub_accounts()
    assert accounts["total"] == 2
    assert accounts["data"][1]["displayName"] == "Production"


def test_get_subscription_name():
    client = make_client([(200, {}, SUBSCRIPTIONS)])
    assert client.subscriptions.get_subscription_name() == "Production"


def test_regions_are_fetched_once():
    client = make_client([(200, {}, LOCATIONS)])
    regions = client.subscriptions.list_regions()
    assert [r.name for r in regions] == ["westeurope", "eastus"]
    assert client.subscriptions.get_region("eastus").display_name == "East US"
    assert client.subscriptions.get_region_by_global_id("westeurope").name == "westeurope"
    assert client.subscriptions.get_default_region().name == "westeurope"
    assert len(client._arm._http.calls) == 1
    assert client._arm._http.urls[0] == f"{BASE_URL}/subscriptions/{SUBSCRIPTION_ID}/locations?api-version=2016-02-01"


def test_refresh_refetches_regions():
    client = make_client([(200, {}, LOCATIONS), (200, {}, {"value": []})])
    client.subscriptions.list_regions()
    assert client.subscriptions.list_regions(refresh=True) == []


def test_unknown_region():
    client = make_client([(200, {}, LOCATIONS)])
    with pytest.raises(ResourceNotFoundError):
        client.subscriptions.get_region("mars")


def test_no_subscription_means_no_regions():
    client = make_client([], access_key="tenant-1")
    assert client.subscriptions.list_regions() == []
    with pytest.raises(ResourceNotFoundError):
        client.subscriptions.get_default_region()
    with pytest.raises(ConfigurationError):
        client.subscriptions.list_vm_sizes("westeurope")
    assert client._arm._http.calls == []


def test_region_capability_uses_client():
    vms = {"value": [{"name": "vm1", "location": "eastus"}, {"name": "vm2", "location": "westeurope"}]}
    client = make_client([(200, {}, LOCATIONS), (200, {}, vms)])
    hosts = client.subscriptions.get_region("westeurope").capability(Capability.HOSTS).list()
    assert [h["name"] for h in hosts] == ["vm2"]


def test_list_vm_sizes():
    sizes = {"value": [{"name": "Standard_B1s", "numberOfCores": 1}]}
    client = make_client([(200, {}, sizes)])
    assert client.subscriptions.list_vm_sizes("westeurope") == sizes["value"]
    assert client._arm._http.urls[0] == (
        f"{BASE_URL}/subscriptions/{SUBSCRIPTION_ID}/providers/Microsoft.Compute/locations/westeurope/vmSizes"
        "?api-version=2018-06-01"
    )


def test_list_classic_disks():
    client = make_client([(200, {}, {"value": [{"name": "osdisk"}]})])
    assert client.subscriptions.list_classic_disks() == [{"name": "osdisk"}]
    assert client._arm._http.urls[0] == (
        f"{BASE_URL}/subscriptions/{SUBSCRIPTION_ID}/services/disks?api-version=2018-06-01"
    )


def test_update_account_clears_region_cache():
    client = make_client([(200, {}, LOCATIONS)])
    client.subscriptions.list_regions()
    client.update_account("tenant-1/other-sub", SECRET)
    assert client.subscriptions._regions is None
