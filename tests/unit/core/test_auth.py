# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for account string parsing and token acquisition."""

import unittest
from unittest.mock import MagicMock

from azure.core.credentials import AccessToken, TokenCredential
from azure.identity import ClientSecretCredential

from CloudProvider.Azure.core._auth import AzureCredentials, _AuthManager
from CloudProvider.Azure.core._error_codes import CREDENTIAL_ACCESS_KEY_MALFORMED, CREDENTIAL_SECRET_MALFORMED
from CloudProvider.Azure.core.config import AZURE_CHINA_CLOUD
from CloudProvider.Azure.core.errors import ErrorKind, UnauthorizedError


class TestCredentialParsing(unittest.TestCase):
    def test_tenant_and_subscription(self):
        creds = AzureCredentials.parse("tenant-1/sub-1", "client-1/s3cret")
        self.assertEqual(creds.tenant_id, "tenant-1")
        self.assertEqual(creds.subscription_id, "sub-1")
        self.assertEqual(creds.client_id, "client-1")
        self.assertEqual(creds.client_secret, "s3cret")

    def test_tenant_only(self):
        creds = AzureCredentials.parse("tenant-1", "client-1/s3cret")
        self.assertIsNone(creds.subscription_id)

    def test_empty_subscription_segment(self):
        self.assertIsNone(AzureCredentials.parse("tenant-1/", "c/s").subscription_id)

    def test_secret_may_contain_slashes(self):
        creds = AzureCredentials.parse("t", "client-1/a/b/c")
        self.assertEqual(creds.client_secret, "a/b/c")

    def test_secret_without_separator(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            AzureCredentials.parse("tenant-1/sub-1", "no-separator")
        self.assertEqual(ctx.exception.kind, ErrorKind.UNAUTHORIZED)
        self.assertEqual(ctx.exception.subcode, CREDENTIAL_SECRET_MALFORMED)

    def test_secret_with_empty_parts(self):
        for secret in ("/secret", "client/", ""):
            with self.subTest(secret=secret):
                with self.assertRaises(UnauthorizedError):
                    AzureCredentials.parse("tenant-1", secret)

    def test_empty_tenant(self):
        with self.assertRaises(UnauthorizedError) as ctx:
            AzureCredentials.parse("/sub-1", "c/s")
        self.assertEqual(ctx.exception.subcode, CREDENTIAL_ACCESS_KEY_MALFORMED)

    def test_secret_is_not_in_repr(self):
        self.assertNotIn("s3cret", repr(AzureCredentials.parse("t", "c/s3cret")))

    def test_token_credential_targets_environment_authority(self):
        credential = AzureCredentials.parse("t", "c/s").to_token_credential(AZURE_CHINA_CLOUD)
        self.assertIsInstance(credential, ClientSecretCredential)


class TestAuthManager(unittest.TestCase):
    def test_rejects_non_credential(self):
        with self.assertRaises(TypeError):
            _AuthManager("not-a-credential")

    def test_acquire_token(self):
        credential = MagicMock(spec=TokenCredential)
        credential.get_token.return_value = AccessToken("abc", 0)
        pair = _AuthManager(credential)._acquire_token("https://management.azure.com/.default")
        credential.get_token.assert_called_once_with("https://management.azure.com/.default")
        self.assertEqual(pair.access_token, "abc")
        self.assertEqual(pair.resource, "https://management.azure.com/.default")
