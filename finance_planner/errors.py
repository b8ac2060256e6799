"""Errors raised by the calculators."""


class InvalidParameterError(ValueError):
    """An input violates a precondition of the requested calculation.

    Raised before any simulation step runs, so no partial result exists.
    """


__all__ = ["InvalidParameterError"]
