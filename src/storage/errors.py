class PersistenceError(Exception):
    """Base exception for reading or writing persisted timer state."""


class MalformedRecordError(PersistenceError):
    """Raised when a stored timer record cannot be decoded."""


class InvalidSetNameError(PersistenceError):
    """Raised when a set name is empty or would escape the sets directory."""


class SetNotFoundError(PersistenceError):
    """Raised when a named set does not exist."""
