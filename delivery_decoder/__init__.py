"""Delivery record decoder: spreadsheet delivery rows -> typed records."""

__version__ = "0.1.0"
