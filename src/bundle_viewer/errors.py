"""Error taxonomy surfaced by the query API."""

from __future__ import annotations


class ViewerError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotLoadedError(ViewerError):
    http_status = 500

    def __init__(self) -> None:
        super().__init__("Data not loaded.")


class KeyDecodeError(ViewerError):
    http_status = 400

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid key path: {reason}")
        self.reason = reason


class KeyNotFoundError(ViewerError):
    http_status = 404

    def __init__(self, key: str) -> None:
        super().__init__(f"Key '{key}' not found.")
        self.key = key


class ShapeMismatchError(ViewerError):
    """A recognized key holds a value that does not match its view schema."""

    http_status = 500

    def __init__(self, label: str, detail: str) -> None:
        super().__init__(f"Failed to process {label} data.")
        self.label = label
        self.detail = detail


class BundleLoadError(Exception):
    """The bundle archive could not be read or parsed."""
