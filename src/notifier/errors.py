class NotifierError(Exception):
    """Base exception for timer completion side effects."""


class NotifierDependencyError(NotifierError):
    """Raised when an optional dependency for a sound backend is missing."""


class NotifierCommandError(NotifierError):
    """Raised when a notification or system command cannot be started."""


class NotifierConfigurationError(NotifierError):
    """Raised when notifier settings are invalid."""
