"""
Date formatting for the trips tile service.

The tile service expects dates as ``month.day.year`` with no zero padding,
e.g. ``1.2.2017`` for 2 January 2017.
"""


def format_date(value) -> str:
    """
    Convert a calendar date into the tile service date format.

    Args:
        value: date, datetime or pandas Timestamp

    Returns:
        Date string in M.D.YYYY form
    """
    return f"{value.month}.{value.day}.{value.year}"
