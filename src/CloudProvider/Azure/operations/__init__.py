# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Azure Resource Manager client.

- ResourceOperations: CRUD, actions and listing of resources
- SubscriptionOperations: subscription and region enumeration
"""

__all__ = []
