"""
tsproject.exceptions - Custom exception classes.

All tsproject-specific exceptions inherit from TsProjectError.
"""


class TsProjectError(Exception):
    """Base exception for all tsproject errors."""

    pass


class ConfigError(TsProjectError):
    """Configuration loading or validation error."""

    pass


class SessionNotOpenError(TsProjectError, PermissionError):
    """Write attempted on the project file without an open write session."""

    pass


class FatalError(TsProjectError):
    """Programming-contract violation. Never caught inside the package."""

    pass


class DescriptorOverflowError(FatalError):
    """Rendered project document reached the size safety margin."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"rendered project file has {length} bytes, limit is {limit}")
