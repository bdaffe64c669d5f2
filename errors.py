# errors.py
class SyncError(Exception):
    """Base class for all netsync errors."""

class ConfigError(SyncError):
    """Raised when the settings are missing or invalid."""

class ApiError(SyncError):
    """Raised by ApiClient when a request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

class FetchError(SyncError):
    """An inventory could not be fetched. Fatal to the run."""

class UpdateError(SyncError):
    """The follower platform rejected or failed an update."""

class PolicyViolation(SyncError):
    """A proposed change touches a field other than the name."""

class InvalidValue(SyncError):
    """A proposed name is not a plain string."""

class SyncCancelled(SyncError):
    """The run was stopped between stages."""
