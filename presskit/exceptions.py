"""Domain-specific exceptions for Presskit."""


class PresskitError(Exception):
    """Base exception for all Presskit errors."""


class FetchError(PresskitError):
    """Error fetching content from the remote repository."""


class UpstreamError(PresskitError):
    """Non-2xx response from the source-control API."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"{status_code} {reason}")
        self.status_code = status_code
        self.reason = reason


class SummarizationError(PresskitError):
    """Error related to the inference provider."""


class StorageError(PresskitError):
    """Error related to key-value store operations."""


class ConfigurationError(PresskitError):
    """Error related to configuration issues."""
