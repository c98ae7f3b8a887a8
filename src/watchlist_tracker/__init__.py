"""Personal stock watchlist tracker."""

__version__ = "0.1.0"
