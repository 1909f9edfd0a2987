"""Kiawah concierge data aggregation engine."""

__version__ = "1.0.0"
