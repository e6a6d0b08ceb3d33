"""
Exceptions raised by the Golden Hour engine.

Only genuine computation failures are exceptions. A sun event that does not
happen on a given day (polar summer, polar night) is normal output and is
represented as an absent value, never raised.
"""


class GoldenHourError(Exception):
    """Base class for all Golden Hour engine errors."""
    pass


class SolarCalculationError(GoldenHourError):
    """Raised when the solar position algorithm cannot produce a result.

    Fatal to the whole calculation request: no partial results are returned.
    """
    pass
