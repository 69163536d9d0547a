"""API clients: shared HTTP transport plus GitHub and Notion wrappers."""

from stars_sync.clients.github import GitHubClient
from stars_sync.clients.http_client import HTTPClient, HTTPClientError, RateLimitError, RetryConfig
from stars_sync.clients.notion import NotionClient

__all__ = [
    "GitHubClient",
    "HTTPClient",
    "HTTPClientError",
    "NotionClient",
    "RateLimitError",
    "RetryConfig",
]
