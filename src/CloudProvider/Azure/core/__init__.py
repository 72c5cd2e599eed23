# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Azure Resource Manager client.

This module contains the foundational components including authentication,
configuration, HTTP transport, and error handling.
"""

from .config import AzureConfig, AzureEnvironment, environment_from_name
from .errors import (
    AsyncOperationFailedError,
    AzureError,
    ConfigurationError,
    DecodeError,
    ErrorKind,
    OperationCancelledError,
    OperationTimeoutError,
    ResourceNotFoundError,
    ServiceError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "AzureConfig",
    "AzureEnvironment",
    "environment_from_name",
    "ErrorKind",
    "AzureError",
    "ResourceNotFoundError",
    "UnauthorizedError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "ServiceError",
    "AsyncOperationFailedError",
    "OperationCancelledError",
    "OperationTimeoutError",
]
