"""Connectivity check against the inventory service.

A connection can fail in many ways, most of them caused by wrong settings.
The check classifies the failure so the operator is told exactly which
setting to fix.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import requests

from assetsync.domain.errors import ErrorKind

logger = logging.getLogger(__name__)

CHECK_QUERY = "users?limit=0"
DEFAULT_TIMEOUT = 30


class ConnectionStatus(str, Enum):
    """Outcome of a connectivity check."""

    SUCCESS = "success"
    MALFORMED_BASE_URI = ErrorKind.MALFORMED_BASE_URI.value
    UNAUTHORIZED = ErrorKind.UNAUTHORIZED.value
    ENDPOINT_NOT_FOUND = ErrorKind.ENDPOINT_NOT_FOUND.value
    UNREACHABLE = ErrorKind.UNREACHABLE.value
    UNEXPECTED_STATUS = ErrorKind.UNEXPECTED_STATUS.value


BASE_URI_HINT = (
    "Please double-check the base URI setting (ASSETSYNC_BASE_URI) and ensure it "
    "points to the API of your Snipe-IT instance, e.g. https://snipe.example.com/api/v1."
)
TOKEN_HINT = (
    "Please check the API token setting (ASSETSYNC_API_TOKEN) and ensure it has been "
    "set to a valid key."
)


@dataclass(frozen=True)
class ConnectionCheck:
    """Classified result of a connectivity check."""

    status: ConnectionStatus
    uri: str
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ConnectionStatus.SUCCESS

    @property
    def message(self) -> str:
        """Operator-facing description, with a remediation hint where one exists."""
        if self.status is ConnectionStatus.SUCCESS:
            return "HTTP 200: Connection to Snipe-IT instance succeeded."
        if self.status is ConnectionStatus.MALFORMED_BASE_URI:
            return f"Cannot build a request URI from '{self.uri}'. {BASE_URI_HINT}"
        if self.status is ConnectionStatus.UNAUTHORIZED:
            if self.status_code is None:
                return f"Cannot send the API token: {self.detail}. {TOKEN_HINT}"
            return f"HTTP {self.status_code}: Unauthorized. {TOKEN_HINT}"
        if self.status is ConnectionStatus.ENDPOINT_NOT_FOUND:
            return f"HTTP 404: URL not found. {BASE_URI_HINT}"
        if self.status is ConnectionStatus.UNREACHABLE:
            return f"Could not reach Snipe-IT instance at {self.uri}: {self.detail}"
        return (
            f"HTTP {self.status_code}: Unexpected HTTP response code, could not connect "
            f"to Snipe-IT instance. {self.detail or ''}"
        ).rstrip()


def build_check_uri(base_uri: str) -> str:
    """Append the check query to ``base_uri``, with or without a trailing '/'."""
    if base_uri.endswith("/"):
        return base_uri + CHECK_QUERY
    return base_uri + "/" + CHECK_QUERY


def check_connection(
    base_uri: str,
    api_token: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ConnectionCheck:
    """Check that the inventory service is reachable and accepts the token.

    Issues a zero-result user listing; nothing is changed remotely.

    Args:
        base_uri: API base URI (e.g. "https://snipe.example.com/api/v1")
        api_token: Bearer token
        session: Optional requests session to send the request with
        timeout: Request timeout in seconds

    Returns:
        ConnectionCheck describing the outcome
    """
    uri = build_check_uri(base_uri or "")
    headers = {"Authorization": f"Bearer {api_token}", "Accept": "application/json"}

    try:
        request = requests.Request("GET", uri, headers=headers).prepare()
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as e:
        logger.debug("Malformed check URI %s: %s", uri, e)
        return ConnectionCheck(ConnectionStatus.MALFORMED_BASE_URI, uri, detail=str(e))
    except requests.exceptions.InvalidHeader as e:
        # Trailing newline or other line break in the token
        logger.debug("Token cannot be sent as a header: %s", e)
        return ConnectionCheck(
            ConnectionStatus.UNAUTHORIZED, uri, detail="API token contains line breaks"
        )

    owns_session = session is None
    if owns_session:
        session = requests.Session()
    try:
        response = session.send(request, timeout=timeout)
    except (requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL) as e:
        return ConnectionCheck(ConnectionStatus.MALFORMED_BASE_URI, uri, detail=str(e))
    except requests.exceptions.RequestException as e:
        logger.debug("Connectivity check to %s failed: %s", uri, e)
        return ConnectionCheck(ConnectionStatus.UNREACHABLE, uri, detail=str(e))
    finally:
        if owns_session:
            session.close()

    code = response.status_code
    if code == 200:
        return ConnectionCheck(ConnectionStatus.SUCCESS, uri, status_code=code)
    if code in (401, 403):
        return ConnectionCheck(ConnectionStatus.UNAUTHORIZED, uri, status_code=code)
    if code == 404:
        return ConnectionCheck(ConnectionStatus.ENDPOINT_NOT_FOUND, uri, status_code=code)
    return ConnectionCheck(
        ConnectionStatus.UNEXPECTED_STATUS, uri, status_code=code, detail=response.text[:500]
    )
