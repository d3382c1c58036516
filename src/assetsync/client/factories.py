"""Client factory functions for creating inventory clients."""

import os
from typing import Optional

from assetsync.client.snipeit import DEFAULT_TIMEOUT, SnipeItClient


def resolve_timeout(timeout: Optional[float] = None) -> float:
    """Return ``timeout``, else ASSETSYNC_TIMEOUT, else the default."""
    if timeout is not None:
        return timeout
    value = os.environ.get("ASSETSYNC_TIMEOUT")
    if not value:
        return DEFAULT_TIMEOUT
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"ASSETSYNC_TIMEOUT must be a number of seconds, got '{value}'")


def create_snipeit_client(
    base_uri: Optional[str] = None,
    api_token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SnipeItClient:
    """Create a Snipe-IT client instance.

    Args:
        base_uri: API base URI. If None, reads ASSETSYNC_BASE_URI
        api_token: API token. If None, reads ASSETSYNC_API_TOKEN
        timeout: Request timeout in seconds. If None, reads ASSETSYNC_TIMEOUT,
            then defaults to 30

    Returns:
        SnipeItClient instance

    Raises:
        ValueError: If the base URI or the token is not configured
    """
    if base_uri is None:
        base_uri = os.environ.get("ASSETSYNC_BASE_URI")
    if api_token is None:
        api_token = os.environ.get("ASSETSYNC_API_TOKEN")

    if not base_uri:
        raise ValueError("No base URI configured (use --base-uri or ASSETSYNC_BASE_URI)")
    if not api_token:
        raise ValueError("No API token configured (use --api-token or ASSETSYNC_API_TOKEN)")

    return SnipeItClient(base_uri=base_uri, api_token=api_token, timeout=resolve_timeout(timeout))
