"""Exceptions raised by period resolution and stepping."""


class MalformedPeriodError(ValueError):
    """Raised when a period window or duration cannot be resolved to dates."""

    pass


class OutOfBoundsError(RuntimeError):
    """Raised when stepping would move an interval past its explicit finish."""

    pass
