# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for _HttpClient timeouts, session use and failure wrapping."""

import unittest
from unittest.mock import MagicMock, patch

import requests

from CloudProvider.Azure.core._http import _HttpClient
from CloudProvider.Azure.core.errors import ErrorKind, TransportError


class TestHttpClientTimeouts(unittest.TestCase):
    @patch("requests.request")
    def test_read_default_timeout(self, mock_request):
        _HttpClient()._request("get", "https://x")
        self.assertEqual(mock_request.call_args.kwargs["timeout"], 10)

    @patch("requests.request")
    def test_write_default_timeout(self, mock_request):
        client = _HttpClient()
        for method in ("put", "post", "delete"):
            client._request(method, "https://x")
            self.assertEqual(mock_request.call_args.kwargs["timeout"], 120)

    @patch("requests.request")
    def test_configured_timeout_wins(self, mock_request):
        _HttpClient(timeout=7)._request("put", "https://x")
        self.assertEqual(mock_request.call_args.kwargs["timeout"], 7)

    @patch("requests.request")
    def test_explicit_timeout_kwarg_wins(self, mock_request):
        _HttpClient(timeout=7)._request("get", "https://x", timeout=1)
        self.assertEqual(mock_request.call_args.kwargs["timeout"], 1)


class TestHttpClientSession(unittest.TestCase):
    def test_uses_session_when_given(self):
        session = MagicMock(spec=requests.Session)
        client = _HttpClient(session=session)
        client._request("get", "https://x", headers={"a": "b"})
        session.request.assert_called_once_with("get", "https://x", headers={"a": "b"}, timeout=10)

    def test_close_closes_session_once(self):
        session = MagicMock(spec=requests.Session)
        client = _HttpClient(session=session)
        client.close()
        client.close()
        session.close.assert_called_once()


class TestHttpClientFailures(unittest.TestCase):
    @patch("requests.request", side_effect=requests.exceptions.ConnectionError("refused"))
    def test_connection_error_is_transport_error(self, _):
        with self.assertRaises(TransportError) as ctx:
            _HttpClient()._request("get", "https://x/y")
        err = ctx.exception
        self.assertEqual(err.kind, ErrorKind.TRANSPORT)
        self.assertTrue(err.is_transient)
        self.assertEqual(err.details["url"], "https://x/y")
        self.assertIsInstance(err.__cause__, requests.exceptions.ConnectionError)

    @patch("requests.request", side_effect=requests.exceptions.Timeout("slow"))
    def test_timeout_is_transport_error(self, _):
        with self.assertRaises(TransportError):
            _HttpClient()._request("put", "https://x")

    @patch("requests.request")
    def test_error_status_is_returned_not_raised(self, mock_request):
        mock_request.return_value = MagicMock(status_code=500)
        self.assertEqual(_HttpClient()._request("get", "https://x").status_code, 500)
        self.assertEqual(mock_request.call_count, 1)


if __name__ == "__main__":
    unittest.main()
