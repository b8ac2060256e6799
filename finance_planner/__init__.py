"""Personal-finance projection calculators."""

from .errors import InvalidParameterError

__version__ = "0.1.0"

__all__ = ["InvalidParameterError", "__version__"]
