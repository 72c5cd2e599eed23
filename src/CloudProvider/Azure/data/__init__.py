# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Azure Resource Manager client.

This module contains request construction, api-version resolution, response
decoding, long-running operation tracking and collection listing.
"""

__all__ = []
