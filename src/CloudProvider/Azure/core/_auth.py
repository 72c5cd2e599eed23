# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Service principal credentials and token acquisition.

Accounts are supplied as two ``/``-delimited strings:

- access key: ``<tenant_id>[/<subscription_id>]``
- secret: ``<client_id>/<client_secret>`` (the client secret may itself contain ``/``)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from azure.core.credentials import TokenCredential
from azure.identity import ClientSecretCredential

from ._error_codes import CREDENTIAL_ACCESS_KEY_MALFORMED, CREDENTIAL_SECRET_MALFORMED
from .config import AzureEnvironment
from .errors import UnauthorizedError


@dataclass(frozen=True)
class AzureCredentials:
    tenant_id: str
    client_id: str
    client_secret: str = field(repr=False)
    subscription_id: Optional[str] = None

    @classmethod
    def parse(cls, access_key: str, secret: str) -> "AzureCredentials":
        """
        Split the account strings into their parts.

        :param access_key: ``tenant_id`` optionally followed by ``/subscription_id``.
        :type access_key: str
        :param secret: ``client_id/client_secret``.
        :type secret: str
        :return: Parsed credentials.
        :rtype: AzureCredentials
        :raises UnauthorizedError: If either string lacks its required segments.
        """
        client_info = (secret or "").split("/")
        account_info = (access_key or "").split("/")
        if len(client_info) < 2 or not client_info[0] or not "/".join(client_info[1:]):
            raise UnauthorizedError(
                "clientId, clientSecret or subscriptionId input error",
                subcode=CREDENTIAL_SECRET_MALFORMED,
            )
        if not account_info[0]:
            raise UnauthorizedError(
                "clientId, clientSecret or subscriptionId input error",
                subcode=CREDENTIAL_ACCESS_KEY_MALFORMED,
            )
        subscription_id = account_info[1] if len(account_info) == 2 and account_info[1] else None
        return cls(
            tenant_id=account_info[0],
            client_id=client_info[0],
            client_secret="/".join(client_info[1:]),
            subscription_id=subscription_id,
        )

    def to_token_credential(self, environment: AzureEnvironment) -> TokenCredential:
        return ClientSecretCredential(
            tenant_id=self.tenant_id,
            client_id=self.client_id,
            client_secret=self.client_secret,
            authority=environment.active_directory_endpoint,
        )


@dataclass
class _TokenPair:
    """
    Container for an OAuth2 access token and its associated resource scope.

    :param resource: The OAuth2 scope/resource for which the token was acquired.
    :type resource: str
    :param access_token: The access token string.
    :type access_token: str
    """

    resource: str
    access_token: str


class _AuthManager:
    """
    Azure Identity-based authentication manager for Resource Manager requests.

    :param credential: Azure Identity credential implementation.
    :type credential: ~azure.core.credentials.TokenCredential
    :raises TypeError: If ``credential`` does not implement :class:`~azure.core.credentials.TokenCredential`.
    """

    def __init__(self, credential: TokenCredential) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        self.credential: TokenCredential = credential

    def _acquire_token(self, scope: str) -> _TokenPair:
        """
        Acquire an access token for the specified OAuth2 scope.

        The credential handles caching and refresh; this is called once per request.

        :param scope: OAuth2 scope string, typically ``"https://management.azure.com/.default"``.
        :type scope: str
        :return: Token pair containing the scope and access token.
        :rtype: _TokenPair
        """
        token = self.credential.get_token(scope)
        return _TokenPair(resource=scope, access_token=token.token)
