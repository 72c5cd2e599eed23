# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import requests

from azure.core.credentials import TokenCredential

from .core._auth import AzureCredentials, _AuthManager
from .core.config import AzureConfig, AzureEnvironment, environment_from_name
from .data._arm import _ARMClient
from .operations.resources import ResourceOperations
from .operations.subscriptions import SubscriptionOperations

_logger = logging.getLogger(__name__)


class AzureClient:
    """
    High-level client for Azure Resource Manager operations.

    The client resolves the ``api-version`` of every request from the resource
    type, issues CRUD and action requests, and waits for long-running operations
    to finish. It delegates HTTP work to an internal
    :class:`~CloudProvider.Azure.data._arm._ARMClient`.

    Accounts are given as two ``/``-delimited strings, parsed before anything
    touches the network:

    - ``access_key``: ``"<tenant_id>"`` or ``"<tenant_id>/<subscription_id>"``
    - ``secret``: ``"<client_id>/<client_secret>"``

    Operations are organized under namespaces:

    - ``client.resources``: get, list, list_all, list_by_type, create, update,
      delete, perform_action, check_name_availability
    - ``client.subscriptions``: subscription and region enumeration

    :param access_key: Tenant id, optionally followed by ``/`` and a subscription id.
    :type access_key: :class:`str`
    :param secret: Service principal client id and secret joined by ``/``.
    :type secret: :class:`str`
    :param config: Optional configuration for environment, timeouts, polling and tables.
        If not provided, defaults are loaded from :meth:`~CloudProvider.Azure.core.config.AzureConfig.from_env`.
    :type config: ~CloudProvider.Azure.core.config.AzureConfig or None
    :param credential: Token credential to use instead of the
        :class:`~azure.identity.ClientSecretCredential` built from ``secret``.
    :type credential: ~azure.core.credentials.TokenCredential or None

    :raises UnauthorizedError: If ``access_key`` or ``secret`` is malformed.
    :raises ConfigurationError: If the configured environment name is unknown.

    Example:
        Using the context manager (recommended)::

            from CloudProvider.Azure.client import AzureClient

            with AzureClient("<tenant>/<subscription>", "<client-id>/<client-secret>") as client:
                vms = client.resources.list_all("Microsoft.Compute/virtualMachines")
                client.resources.perform_action(vms[0]["id"], "start")
    """

    def __init__(
        self,
        access_key: str,
        secret: str,
        config: Optional[AzureConfig] = None,
        *,
        credential: Optional[TokenCredential] = None,
    ) -> None:
        self._credentials = AzureCredentials.parse(access_key, secret)
        self._config = config or AzureConfig.from_env()
        self._environment: AzureEnvironment = self._config.environment
        self._credential_override = credential
        self.auth = _AuthManager(credential or self._credentials.to_token_credential(self._environment))
        self._arm: Optional[_ARMClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.resources = ResourceOperations(self)
        self.subscriptions = SubscriptionOperations(self)

    @property
    def subscription_id(self) -> Optional[str]:
        return self._credentials.subscription_id

    @property
    def tenant_id(self) -> str:
        return self._credentials.tenant_id

    @property
    def environment(self) -> AzureEnvironment:
        return self._environment

    def __enter__(self) -> "AzureClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling; all operations within
        the context reuse it.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources.

        Safe to call multiple times.
        """
        if self._arm is not None:
            self._arm.close()
            self._arm = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def update_account(self, access_key: str, secret: str, environment_name: Optional[str] = None) -> None:
        """
        Switch to another account or cloud.

        Nothing changes when the account strings and environment are unchanged.

        :raises UnauthorizedError: If the new strings are malformed; the client keeps its old account.
        :raises ConfigurationError: If ``environment_name`` is unknown.
        """
        credentials = AzureCredentials.parse(access_key, secret)
        environment = self._environment
        if environment_name is not None:
            environment = environment_from_name(environment_name)
        if credentials == self._credentials and environment == self._environment:
            return
        _logger.info("switching account to tenant %s (%s)", credentials.tenant_id, environment.name)
        self._credentials = credentials
        self._environment = environment
        self.auth = _AuthManager(self._credential_override or credentials.to_token_credential(environment))
        # The next call rebuilds the low-level client against the new account
        self._arm = None
        self.subscriptions._invalidate()

    def _get_arm(self) -> _ARMClient:
        """
        Get or create the internal Resource Manager client.

        Construction is deferred to the first API call so that building an
        :class:`AzureClient` never touches the network.
        """
        if self._arm is None:
            self._arm = _ARMClient(
                self.auth,
                self._environment,
                self._config,
                subscription_id=self._credentials.subscription_id,
                session=self._session,
            )
        return self._arm

    @contextmanager
    def _scoped_arm(self) -> Iterator[_ARMClient]:
        """Yield the low-level client while ensuring a correlation scope is active."""
        arm = self._get_arm()
        with arm._call_scope():
            yield arm
