# errors.py


class SyncError(Exception):
    """Base class for everything a sync run can fail with."""


class ConfigurationError(SyncError):
    """A required setting is missing or unusable."""


class SourceReadError(SyncError):
    """The spreadsheet (or the named sheet in it) could not be read."""


class RemoteAPIError(SyncError):
    def __init__(self, status_code: int, body: str, what: str = "GitHub API"):
        self.status_code = status_code
        self.body = body
        super().__init__(f"{what} error: {status_code} - {body}")


class TransportError(SyncError):
    """Network-level failure (DNS, TLS, timeout, connection reset ...)."""
