# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Azure Resource Manager client tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest
from unittest.mock import Mock

from CloudProvider.Azure.core.config import AzureConfig


@pytest.fixture
def dummy_auth():
    """Mock authentication object for testing."""

    class DummyAuth:
        def _acquire_token(self, scope):
            class Token:
                access_token = "test_token_12345"

            return Token()

    return DummyAuth()


@pytest.fixture
def test_config():
    """Test configuration with instant, deterministic polling."""
    return AzureConfig(
        http_timeout=5,
        poll_interval=0,
        poll_retries=2,
        poll_backoff=0,
        poll_jitter=False,
    )


@pytest.fixture
def mock_http_client():
    """Mock HTTP client for unit tests."""
    mock = Mock()
    mock._request.return_value = Mock()
    return mock


@pytest.fixture
def sample_subscription_id():
    """Standard test subscription id."""
    return "11111111-2222-3333-4444-555555555555"


@pytest.fixture
def sample_disk_id(sample_subscription_id):
    """Resource id of a managed disk."""
    return (
        f"/subscriptions/{sample_subscription_id}/resourceGroups/cloud-storage"
        "/providers/Microsoft.Compute/disks/data-01"
    )


@pytest.fixture
def sample_vm_id(sample_subscription_id):
    """Resource id of a virtual machine."""
    return (
        f"/subscriptions/{sample_subscription_id}/resourceGroups/cloud-compute"
        "/providers/Microsoft.Compute/virtualMachines/vm-01"
    )
