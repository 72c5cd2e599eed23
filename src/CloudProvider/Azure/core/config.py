# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from ..common.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_API_VERSIONS,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RESOURCE_GROUPS,
)
from ._error_codes import CONFIG_UNKNOWN_ENVIRONMENT
from .errors import ConfigurationError


@dataclass(frozen=True)
class AzureEnvironment:
    """
    Endpoints of one Azure cloud.

    :param name: Canonical environment name, e.g. ``"AzurePublicCloud"``.
    :type name: str
    :param resource_manager_endpoint: Base URL of the Resource Manager API, with trailing slash.
    :type resource_manager_endpoint: str
    :param active_directory_endpoint: Azure Active Directory authority host, with trailing slash.
    :type active_directory_endpoint: str
    """

    name: str
    resource_manager_endpoint: str
    active_directory_endpoint: str

    @property
    def base_url(self) -> str:
        return self.resource_manager_endpoint.rstrip("/")

    @property
    def scope(self) -> str:
        return f"{self.base_url}/.default"


AZURE_PUBLIC_CLOUD = AzureEnvironment(
    name="AzurePublicCloud",
    resource_manager_endpoint="https://management.azure.com/",
    active_directory_endpoint="https://login.microsoftonline.com/",
)
AZURE_CHINA_CLOUD = AzureEnvironment(
    name="AzureChinaCloud",
    resource_manager_endpoint="https://management.chinacloudapi.cn/",
    active_directory_endpoint="https://login.chinacloudapi.cn/",
)
AZURE_US_GOVERNMENT_CLOUD = AzureEnvironment(
    name="AzureUSGovernmentCloud",
    resource_manager_endpoint="https://management.usgovcloudapi.net/",
    active_directory_endpoint="https://login.microsoftonline.us/",
)
AZURE_GERMAN_CLOUD = AzureEnvironment(
    name="AzureGermanCloud",
    resource_manager_endpoint="https://management.microsoftazure.de/",
    active_directory_endpoint="https://login.microsoftonline.de/",
)

_ENVIRONMENTS = {
    "azurepubliccloud": AZURE_PUBLIC_CLOUD,
    "azureglobalcloud": AZURE_PUBLIC_CLOUD,
    "azurechinacloud": AZURE_CHINA_CLOUD,
    "azureusgovernmentcloud": AZURE_US_GOVERNMENT_CLOUD,
    "azuregermancloud": AZURE_GERMAN_CLOUD,
}


def environment_from_name(name: str) -> AzureEnvironment:
    """
    Look up a cloud environment by name (case-insensitive).

    :raises ConfigurationError: If the name does not match a known cloud.
    """
    env = _ENVIRONMENTS.get((name or "").strip().lower())
    if env is None:
        raise ConfigurationError(
            f"Unknown Azure environment '{name}'.",
            subcode=CONFIG_UNKNOWN_ENVIRONMENT,
            details={"known": sorted({e.name for e in _ENVIRONMENTS.values()})},
        )
    return env


@dataclass(frozen=True)
class AzureConfig:
    """
    Configuration settings for Azure Resource Manager client operations.

    :param environment_name: Azure cloud to talk to (default: ``"AzurePublicCloud"``).
    :type environment_name: str
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param poll_interval: Seconds to wait between polls of a long-running operation (default: 5.0).
    :type poll_interval: float
    :param poll_timeout: Upper bound in seconds for waiting on one long-running operation.
        ``None`` waits until the operation is terminal.
    :type poll_timeout: float or None
    :param poll_retries: Retries for transient failures of a single poll (default: 3).
    :type poll_retries: int
    :param poll_backoff: Base delay in seconds for exponential backoff between poll retries (default: 0.5).
    :type poll_backoff: float
    :param poll_max_backoff: Cap on any single wait, including server-provided ``Retry-After`` (default: 60.0).
    :type poll_max_backoff: float
    :param poll_jitter: Whether to add jitter to poll retry delays (default: True).
    :type poll_jitter: bool
    :param default_api_version: api-version used when no table entry matches.
    :type default_api_version: str
    :param api_versions: Resource type prefix to api-version table.
    :type api_versions: Mapping[str, str]
    :param resource_groups: Resource type to default resource group table.
    :type resource_groups: Mapping[str, str]
    """

    environment_name: str = AZURE_PUBLIC_CLOUD.name

    http_timeout: Optional[float] = None

    # Long-running operation tracking
    poll_interval: float = DEFAULT_POLL_INTERVAL
    poll_timeout: Optional[float] = None
    poll_retries: int = 3
    poll_backoff: float = 0.5
    poll_max_backoff: float = 60.0
    poll_jitter: bool = True

    default_api_version: str = DEFAULT_API_VERSION
    api_versions: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_API_VERSIONS)))
    resource_groups: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_RESOURCE_GROUPS))
    )

    def __post_init__(self) -> None:
        # Freeze caller-supplied tables so no client can mutate them after construction
        if not isinstance(self.api_versions, MappingProxyType):
            object.__setattr__(self, "api_versions", MappingProxyType(dict(self.api_versions)))
        if not isinstance(self.resource_groups, MappingProxyType):
            object.__setattr__(self, "resource_groups", MappingProxyType(dict(self.resource_groups)))

    @property
    def environment(self) -> AzureEnvironment:
        return environment_from_name(self.environment_name)

    @classmethod
    def from_env(cls) -> "AzureConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~CloudProvider.Azure.core.config.AzureConfig
        """
        # Environment-free defaults
        return cls(
            environment_name=AZURE_PUBLIC_CLOUD.name,
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            poll_interval=DEFAULT_POLL_INTERVAL,
            poll_timeout=None,
        )
