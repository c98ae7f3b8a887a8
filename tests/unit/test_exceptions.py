"""Unit tests for watchlist_tracker exception hierarchy."""

import pytest

from watchlist_tracker.exceptions import (
    CacheReadError,
    CsvParseError,
    DatabaseReadError,
    DatabaseWriteError,
    ParseFailure,
    RemoteStoreError,
    StorageError,
    WatchlistTrackerError,
)


class TestExceptionHierarchy:
    """Test exception class hierarchy and relationships."""

    def test_base_exception(self) -> None:
        exc = WatchlistTrackerError("test error")
        assert str(exc) == "test error"
        assert isinstance(exc, Exception)

    @pytest.mark.parametrize("cls", [CsvParseError, CacheReadError])
    def test_parse_failures(self, cls: type[Exception]) -> None:
        exc = cls("bad input")
        assert isinstance(exc, ParseFailure)
        assert isinstance(exc, WatchlistTrackerError)

    @pytest.mark.parametrize("cls", [DatabaseWriteError, DatabaseReadError])
    def test_storage_errors(self, cls: type[Exception]) -> None:
        assert isinstance(cls("db"), StorageError)


class TestRemoteStoreError:
    def test_status_code(self) -> None:
        exc = RemoteStoreError("Invalid data format", status_code=400)
        assert str(exc) == "Invalid data format"
        assert exc.status_code == 400
        assert isinstance(exc, WatchlistTrackerError)

    def test_transport_failure_has_no_status(self) -> None:
        assert RemoteStoreError("Failed to load from database").status_code is None


class TestDatabaseWriteError:
    def test_details(self) -> None:
        exc = DatabaseWriteError("Some rows failed to save", details=[{"symbol": "", "error": "x"}])
        assert exc.details == [{"symbol": "", "error": "x"}]

    def test_details_default(self) -> None:
        assert DatabaseWriteError("boom").details == []
