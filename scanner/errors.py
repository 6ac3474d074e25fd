"""Error types raised by the resolver and the scanner."""

from typing import Optional


class ConfigurationError(ValueError):
    """Invalid input detected before any filesystem access."""


class ScanError(OSError):
    """
    Filesystem failure while enumerating or reading definition files.
    
    The underlying exception is kept on ``cause`` and is also chained as
    ``__cause__`` when raised with ``raise ... from``.
    """
    
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
    
    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"
