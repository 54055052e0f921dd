"""Recruitment analytics over TA tracker spreadsheet exports."""

__version__ = "0.3.0"
