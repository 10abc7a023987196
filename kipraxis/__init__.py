"""Usage and billing core for the kipraxishelfer practice dashboard."""

__version__ = "0.3.0"
