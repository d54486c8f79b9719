class DirectoryError(Exception):
    """Base directory exception."""

class ValidationError(DirectoryError):
    """A single violated rule on a server record or address."""

class ServerNotFound(DirectoryError):
    """Raised when no server is stored under an address."""

class StoreError(DirectoryError):
    """Raised when the server store fails."""

class ConfigurationError(DirectoryError):
    """Raised when routing or settings are not wired as expected."""
