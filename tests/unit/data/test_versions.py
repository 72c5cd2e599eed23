# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from CloudProvider.Azure.common.constants import DEFAULT_API_VERSION, DEFAULT_API_VERSIONS
from CloudProvider.Azure.data._versions import VersionTable


@pytest.fixture
def table():
    return VersionTable(DEFAULT_API_VERSIONS)


@pytest.mark.parametrize("resource_type,version", sorted(DEFAULT_API_VERSIONS.items()))
def test_every_entry_resolves_to_its_own_version(table, resource_type, version):
    assert table.resolve(resource_type) == version


def test_unknown_type_falls_back_to_default(table):
    assert table.resolve("Microsoft.Web/sites") == DEFAULT_API_VERSION
    assert table.resolve("") == DEFAULT_API_VERSION
    assert table.resolve(None) == DEFAULT_API_VERSION


def test_lookup_is_case_insensitive_substring(table):
    rid = "/subscriptions/s/resourceGroups/rg/providers/microsoft.compute/DISKS/d1"
    assert table.resolve(rid) == "2018-06-01"


def test_longest_prefix_wins_over_shorter_overlap(table):
    # "Microsoft.Network" (2018-06-01) and "Microsoft.Network/virtualNetworks" (2018-08-01) both match
    rid = "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Network/virtualNetworks/vnet1"
    assert table.resolve(rid) == "2018-08-01"
    # "Microsoft.Storage" and "Microsoft.Storage/storageAccounts" share a version; still resolves
    assert table.resolve("Microsoft.Storage/storageAccounts/acct") == "2016-12-01"


def test_resolution_does_not_depend_on_insertion_order():
    entries = [("Microsoft.Network", "A"), ("Microsoft.Network/virtualNetworks", "B")]
    forward = VersionTable(entries)
    backward = VersionTable(list(reversed(entries)))
    path = "/providers/Microsoft.Network/virtualNetworks/v"
    assert forward.resolve(path) == backward.resolve(path) == "B"


def test_equal_length_ties_are_deterministic():
    entries = [("Vendor.A/xx", "1"), ("Vendor.B/xx", "2")]
    path = "Vendor.A/xx and Vendor.B/xx"
    assert VersionTable(entries).resolve(path) == VersionTable(list(reversed(entries))).resolve(path) == "2"


def test_custom_default_and_exact_lookup():
    table = VersionTable({"Microsoft.Compute/disks": "2018-06-01"}, default="2020-01-01")
    assert table.default == "2020-01-01"
    assert table.resolve("Microsoft.Web/sites") == "2020-01-01"
    assert table.get("Microsoft.Compute/disks") == "2018-06-01"
    assert table.get("Microsoft.Compute") is None
    assert "Microsoft.Compute/disks" in table
    assert len(table) == 1
