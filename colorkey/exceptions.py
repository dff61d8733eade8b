class InvalidInput(ValueError):
    """Raised when a pixel buffer, color or tolerance breaks the input contract."""


class SessionError(RuntimeError):
    """Raised when an editing session is asked to act before it has the data to."""
