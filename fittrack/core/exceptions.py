# fittrack/core/exceptions.py
"""
Errors raised by the goal and progress analytics helpers.

Handlers translate these into 400 responses; a zero-like result (streak 0,
trend "stable") is never reported through an exception.
"""


class AnalyticsError(ValueError):
    """Base class for analytics failures"""


class InvalidInputError(AnalyticsError):
    """A required collection is empty or an argument is outside its domain"""


class InsufficientDataError(AnalyticsError):
    """Fewer data points than the computation needs"""
