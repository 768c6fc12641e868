"""Timestamp formatting for display."""

import time

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(timestamp: float) -> str:
    """Format an epoch timestamp in local time, to the second."""
    return time.strftime(TIMESTAMP_FORMAT, time.localtime(timestamp))
