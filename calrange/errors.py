"""Exceptions raised by calrange.

All library-specific exceptions inherit from CalrangeError. The concrete
errors also subclass ValueError so callers that only catch ValueError keep
working.
"""


class CalrangeError(Exception):
    """Base exception for all calrange errors."""

    pass


class InvalidIntervalError(CalrangeError, ValueError):
    """A range whose start falls after its end."""

    pass


class InvalidStepError(CalrangeError, ValueError):
    """A step or chunk size that cannot make progress.

    Examples:
        - Zero or negative chunk duration
        - Negative iteration step
        - Unknown calendar unit keyword
    """

    pass
