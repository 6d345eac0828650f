"""Exception types raised by detection-overlap matching."""


class DetectionOverlapError(Exception):
    """Base class for all matching errors."""


class UsageError(DetectionOverlapError, ValueError):
    """
    An input precondition was violated.

    Raised before any matching work starts: multi-slice stacks, maps of
    different dimensions, non-integer or negative labels, unreadable files.
    """


class SolverError(DetectionOverlapError, RuntimeError):
    """The linear solver failed or returned an unusable assignment."""
