"""Fetch engine: definition resolution, execution and decoding."""

from kubedeck.controllers.fetch.api_client import (
    ApiClientError,
    ApiConnectionError,
    ClusterApiClient,
)
from kubedeck.controllers.fetch.proxy import ApiProxy, parse_proxy_address
from kubedeck.controllers.fetch.resource_builder import ResourceBuilder, log_since_seconds

__all__ = [
    "ApiClientError",
    "ApiConnectionError",
    "ApiProxy",
    "ClusterApiClient",
    "ResourceBuilder",
    "log_since_seconds",
    "parse_proxy_address",
]
