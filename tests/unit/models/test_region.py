# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from CloudProvider.Azure.core.errors import ResourceNotFoundError
from CloudProvider.Azure.models.region import Capability, Region
from tests.unit.test_helpers import SUBSCRIPTION_ID, TestableClient, disk_id, vm_id

LOCATION = {
    "id": f"/subscriptions/{SUBSCRIPTION_ID}/locations/westeurope",
    "name": "westeurope",
    "displayName": "West Europe",
    "metadata": {"latitude": "52.3667", "longitude": "4.9"},
}


def vm(name, location):
    return {"id": vm_id(name), "name": name, "type": "Microsoft.Compute/virtualMachines", "location": location}


def test_from_dict():
    region = Region.from_dict(LOCATION, subscription_id=SUBSCRIPTION_ID)
    assert region.name == "westeurope"
    assert region.global_id == "westeurope"
    assert region.display_name == "West Europe"
    assert region.latitude == "52.3667"
    assert region.to_dict()["subscription_id"] == SUBSCRIPTION_ID
    assert region.capabilities == frozenset(Capability)


def test_unbound_region_has_no_capability_accessor():
    with pytest.raises(RuntimeError):
        Region.from_dict(LOCATION).capability(Capability.HOSTS)


def test_unknown_capability():
    region = Region.from_dict(LOCATION, client=TestableClient([]))
    with pytest.raises(ValueError):
        region.capability("gpus")


def test_hosts_list_filters_by_location():
    c = TestableClient([(200, {}, {"value": [vm("a", "westeurope"), vm("b", "eastus"), vm("c", "West Europe")]})])
    region = Region.from_dict(LOCATION, subscription_id=SUBSCRIPTION_ID, client=c)
    hosts = region.capability(Capability.HOSTS).list()
    assert [h["name"] for h in hosts] == ["a", "c"]
    assert "/providers/Microsoft.Compute/virtualMachines?" in c._http.urls[0]


def test_capability_get_in_region():
    c = TestableClient([(200, {}, vm("a", "westeurope"))])
    cap = Region.from_dict(LOCATION, client=c).capability(Capability.HOSTS)
    assert cap.get(vm_id("a"))["name"] == "a"


def test_capability_get_wrong_region():
    c = TestableClient([(200, {}, vm("b", "eastus"))])
    cap = Region.from_dict(LOCATION, client=c).capability(Capability.HOSTS)
    with pytest.raises(ResourceNotFoundError):
        cap.get(vm_id("b"))


def test_capability_get_wrong_type_skips_network():
    c = TestableClient([])
    cap = Region.from_dict(LOCATION, client=c).capability(Capability.NETWORKS)
    with pytest.raises(ResourceNotFoundError):
        cap.get(disk_id())
    assert c._http.calls == []
