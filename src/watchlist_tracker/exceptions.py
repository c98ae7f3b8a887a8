"""Exception classes for watchlist-tracker."""


class WatchlistTrackerError(Exception):
    """Base exception for watchlist-tracker."""


# Parse-related exceptions


class ParseFailure(WatchlistTrackerError):
    """Base exception for malformed CSV text or cached data."""


class CsvParseError(ParseFailure):
    """Exception raised when CSV text cannot be turned into a table."""


class CacheReadError(ParseFailure):
    """Exception raised when a local cache slot holds unreadable JSON."""


# Remote store exceptions


class RemoteStoreError(WatchlistTrackerError):
    """Exception raised when a remote save/load fails (non-2xx or transport error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize RemoteStoreError.

        Args:
            message: Server-provided error message or a generic fallback
            status_code: HTTP status code, None for transport failures
        """
        self.status_code = status_code
        super().__init__(message)


# Backend storage exceptions


class StorageError(WatchlistTrackerError):
    """Base exception for SQLite storage errors."""


class DatabaseWriteError(StorageError):
    """Exception raised when a write transaction fails."""

    def __init__(self, message: str, details: list[dict[str, str]] | None = None) -> None:
        """Initialize DatabaseWriteError.

        Args:
            message: Error message
            details: Per-row failure details (symbol and error)
        """
        self.details = details or []
        super().__init__(message)


class DatabaseReadError(StorageError):
    """Exception raised when a stored record cannot be read back."""
