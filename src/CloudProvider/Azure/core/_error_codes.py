# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_412 = "http_412"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    409: HTTP_409,
    412: HTTP_412,
    429: HTTP_429,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
    504: HTTP_504,
}


def _http_subcode(status: int) -> str:
    return _HTTP_STATUS_TO_SUBCODE.get(status, f"http_{status}")


# Credential subcodes
CREDENTIAL_ACCESS_KEY_MALFORMED = "credential_access_key_malformed"
CREDENTIAL_SECRET_MALFORMED = "credential_secret_malformed"

# Configuration subcodes
CONFIG_SUBSCRIPTION_MISSING = "config_subscription_missing"
CONFIG_RESOURCE_GROUP_MISSING = "config_resource_group_missing"
CONFIG_FIELD_MISSING = "config_field_missing"
CONFIG_RESOURCE_ID_MISSING = "config_resource_id_missing"
CONFIG_UNKNOWN_ENVIRONMENT = "config_unknown_environment"

# Decode subcodes
DECODE_INVALID_JSON = "decode_invalid_json"
DECODE_ERROR_PAYLOAD = "decode_error_payload"
DECODE_UNEXPECTED_SHAPE = "decode_unexpected_shape"

# Long-running operation subcodes
ASYNC_STATUS_FAILED = "async_status_failed"
ASYNC_POLL_HTTP_ERROR = "async_poll_http_error"
ASYNC_DEADLINE_EXCEEDED = "async_deadline_exceeded"
ASYNC_CANCELLED = "async_cancelled"
