"""Exception types raised by the yarrow engine."""


class YarrowError(Exception):
    """Base class for every error raised by the yarrow package."""
    pass


class ClockUnavailableError(YarrowError):
    """
    Raised when the wall clock cannot be read.

    This is an environment fault, not a generator-logic error: every reseed
    and extraction path depends on the clock, so the operation is aborted
    and the error propagates to the caller without retry.
    """
    pass


class InvalidBoundsError(YarrowError, ValueError):
    """Raised when a bounded draw is requested with max < min."""
    pass


class UnknownDigestError(YarrowError, KeyError):
    """Raised when a digest name is not present in the registry."""
    pass
