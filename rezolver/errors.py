"""Exception types raised by rezolver.

Unresolved resources are never errors: they come back as an unresolved
``ResourceInfo``. Only programmer mistakes in configuration surface here.
"""


class RezolverError(Exception):
    """Base class for rezolver errors."""


class InvalidConfigurationError(RezolverError, ValueError):
    """A loader, chain or settings file was configured with an invalid value."""


class InvalidPathError(RezolverError, ValueError):
    """A filesystem abstraction rejected a path string as malformed."""

    def __init__(self, location: str, reason: str):
        super().__init__(f"Invalid path {location!r}: {reason}")
        self.location = location
        self.reason = reason
