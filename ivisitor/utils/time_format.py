# ivisitor/utils/time_format.py
"""12-hour clock formatting for check-in/check-out times."""

from datetime import datetime, time
from typing import Optional, Union


def format_12h(value: Optional[Union[time, datetime]]) -> Optional[str]:
    """13:05 -> "1:05 PM", 00:30 -> "12:30 AM". Returns None for None."""
    if value is None:
        return None
    suffix = "PM" if value.hour >= 12 else "AM"
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {suffix}"


def annotate_times(visitor):
    """Attach formatted_time / formatted_out_time to a Visitor row for serialization."""
    visitor.formatted_time = format_12h(visitor.in_time)
    visitor.formatted_out_time = format_12h(visitor.out_time)
    return visitor
