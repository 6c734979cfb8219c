"""
Exceptions raised by the rwmcmc package.

Configuration problems are reported with the built-in ValueError/TypeError.
Only failures of the persistent storage backend get a dedicated type so that
callers can tell "the disk could not hold this run" apart from bad arguments.
"""


class DatasetAllocationError(RuntimeError):
    """Raised when the on-disk sample dataset cannot be created or allocated."""
