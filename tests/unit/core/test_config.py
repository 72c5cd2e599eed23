# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import dataclasses

import pytest

from CloudProvider.Azure.common.constants import DEFAULT_API_VERSION, DEFAULT_RESOURCE_GROUPS
from CloudProvider.Azure.core._error_codes import CONFIG_UNKNOWN_ENVIRONMENT
from CloudProvider.Azure.core.config import (
    AZURE_CHINA_CLOUD,
    AZURE_PUBLIC_CLOUD,
    AzureConfig,
    environment_from_name,
)
from CloudProvider.Azure.core.errors import ConfigurationError


def test_defaults():
    cfg = AzureConfig.from_env()
    assert cfg.environment is AZURE_PUBLIC_CLOUD
    assert cfg.poll_interval == 5.0
    assert cfg.poll_timeout is None
    assert cfg.http_timeout is None
    assert cfg.default_api_version == DEFAULT_API_VERSION == "2016-02-01"
    assert dict(cfg.resource_groups) == DEFAULT_RESOURCE_GROUPS


@pytest.mark.parametrize("name", ["AzurePublicCloud", "azurepubliccloud", "AzureGlobalCloud"])
def test_public_cloud_aliases(name):
    assert environment_from_name(name) is AZURE_PUBLIC_CLOUD


def test_china_cloud_endpoints():
    env = environment_from_name("AzureChinaCloud")
    assert env is AZURE_CHINA_CLOUD
    assert env.base_url == "https://management.chinacloudapi.cn"
    assert env.scope == "https://management.chinacloudapi.cn/.default"


def test_unknown_environment():
    with pytest.raises(ConfigurationError) as ei:
        environment_from_name("MarsCloud")
    assert ei.value.subcode == CONFIG_UNKNOWN_ENVIRONMENT
    with pytest.raises(ConfigurationError):
        AzureConfig(environment_name="MarsCloud").environment


def test_config_is_frozen():
    cfg = AzureConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.poll_interval = 1


def test_tables_are_read_only_copies():
    source = {"Microsoft.Web/sites": "web-rg"}
    cfg = AzureConfig(resource_groups=source)
    source["Microsoft.Web/sites"] = "changed"
    assert cfg.resource_groups["Microsoft.Web/sites"] == "web-rg"
    with pytest.raises(TypeError):
        cfg.resource_groups["Microsoft.Web/sites"] = "x"
    with pytest.raises(TypeError):
        cfg.api_versions["Microsoft.Web"] = "x"
