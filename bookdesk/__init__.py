"""Booking rules engine and API for the home-services operations dashboard."""

__version__ = "1.0.0"
