from datetime import datetime


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_date(value: datetime) -> str:
    """Format *value* as a long human date, e.g. ``October 17th, 2026``."""
    return f"{value:%B} {_ordinal(value.day)}, {value.year}"
