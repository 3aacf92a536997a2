"""Exceptions raised on the write path.

Read-path computations (classification, averaging, insights, windowing)
never raise for malformed input; they degrade to None or Category.NORMAL.
"""


class BPLogError(Exception):
    """Base class for all BP Log errors."""


class ValidationError(BPLogError, ValueError):
    """Input rejected before anything was persisted."""


class EmptySessionError(ValidationError):
    """No reading in a session passed validation."""


class InvalidOverrideError(ValidationError):
    """User-supplied session average is outside accepted ranges."""


class InvalidReadingError(ValidationError):
    """Single reading is incomplete or outside accepted ranges."""


class TooManyReadingsError(ValidationError):
    """Session holds more readings than allowed."""


class StoreWriteError(BPLogError):
    """Store failed to persist a record.

    The underlying store exception is available as ``__cause__``.
    """
