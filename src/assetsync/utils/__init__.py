"""Utility functions for assetsync."""

from assetsync.utils.date_parser import format_timestamp, parse_months, parse_timestamp

__all__ = ["format_timestamp", "parse_months", "parse_timestamp"]
