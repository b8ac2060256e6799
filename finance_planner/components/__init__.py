"""Expose component submodules for convenience.

``forms`` needs a running Streamlit session and is imported by the app only.
"""

from . import charts, insights, report  # noqa: F401

__all__ = ["charts", "insights", "report"]
