from typing import Optional


class CalmTunesException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DatabaseConnectionError(CalmTunesException):
    """Database descriptor is malformed or the host cannot be reached."""


class StatementError(CalmTunesException):
    """A statement inside a migration or seed script failed."""

    def __init__(self, script: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.script = script
        self.cause = cause
        if message is None:
            message = f"{script}: {cause}" if cause is not None else script
        super().__init__(message)


class UsageError(CalmTunesException):
    """Bad invocation or configuration, raised before any connection is made."""
