# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Azure Resource Manager wire protocol.

These constants define the header names, content types and lookup tables used
when building ARM requests and tracking long-running operations.
"""

# Fallback api-version used when no table entry matches a resource type
DEFAULT_API_VERSION = "2016-02-01"

# Resource type prefix -> api-version.
# Entries are matched case-insensitively as substrings of the request path;
# the longest matching prefix wins.
DEFAULT_API_VERSIONS = {
    "Microsoft.Compute/virtualMachines": "2018-04-01",
    "Microsoft.ClassicCompute/virtualMachines": "2017-04-01",
    "Microsoft.Compute/operations": "2018-10-01",
    "Microsoft.ClassicCompute/operations": "2017-04-01",
    "Microsoft.Compute/locations": "2018-06-01",
    "Microsoft.Network/virtualNetworks": "2018-08-01",
    "Microsoft.ClassicNetwork/virtualNetworks": "2017-11-15",
    "Microsoft.Compute/disks": "2018-06-01",
    "Microsoft.Storage/storageAccounts": "2016-12-01",
    "Microsoft.ClassicStorage/storageAccounts": "2016-04-01",
    "Microsoft.Compute/snapshots": "2018-06-01",
    "Microsoft.Compute/images": "2018-10-01",
    "Microsoft.Storage": "2016-12-01",
    "Microsoft.Network/publicIPAddresses": "2018-06-01",
    "Microsoft.Network/networkSecurityGroups": "2018-06-01",
    "Microsoft.Network/networkInterfaces": "2018-06-01",
    "Microsoft.Network": "2018-06-01",
    "Microsoft.ClassicNetwork/reservedIps": "2016-04-01",
    "Microsoft.ClassicNetwork/networkSecurityGroups": "2016-11-01",
}

# Resource type -> resource group that new resources of that type are placed in
DEFAULT_RESOURCE_GROUPS = {
    "Microsoft.Compute/virtualMachines": "cloud-compute",
    "Microsoft.ClassicCompute/virtualMachines": "cloud-classic-compute",
    "Microsoft.Compute/disks": "cloud-storage",
    "Microsoft.Compute/snapshots": "cloud-storage",
    "Microsoft.Compute/images": "cloud-image",
    "Microsoft.Storage/storageAccounts": "cloud-storage",
    "Microsoft.ClassicStorage/storageAccounts": "cloud-classic-storage",
    "Microsoft.Network/virtualNetworks": "cloud-network",
    "Microsoft.Network/publicIPAddresses": "cloud-network",
    "Microsoft.Network/networkSecurityGroups": "cloud-network",
    "Microsoft.Network/networkInterfaces": "cloud-network",
    "Microsoft.ClassicNetwork/virtualNetworks": "cloud-classic-network",
    "Microsoft.ClassicNetwork/reservedIps": "cloud-classic-network",
    "Microsoft.ClassicNetwork/networkSecurityGroups": "cloud-classic-network",
}

# HTTP headers
HEADER_LOCATION = "Location"
HEADER_ASYNC_OPERATION = "Azure-AsyncOperation"
HEADER_RETRY_AFTER = "Retry-After"
HEADER_CLIENT_REQUEST_ID = "x-ms-client-request-id"
HEADER_CORRELATION_REQUEST_ID = "x-ms-correlation-request-id"
HEADER_REQUEST_ID = "x-ms-request-id"

CONTENT_TYPE_JSON = "application/json; charset=utf-8"

# Long-running operation status values reported through Azure-AsyncOperation
ASYNC_STATUS_IN_PROGRESS = "InProgress"
ASYNC_STATUS_SUCCEEDED = "Succeeded"

# Seconds between two polls of a long-running operation
DEFAULT_POLL_INTERVAL = 5.0

# Poll statuses worth retrying before declaring an operation failed
TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
