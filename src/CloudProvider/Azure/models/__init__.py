# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Azure Resource Manager client.

- :class:`~CloudProvider.Azure.models.resource.ResourceReference`: Address of one resource.
- :class:`~CloudProvider.Azure.models.region.Region`: A location and its capabilities.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from the
    specific module files.
"""

__all__ = []
