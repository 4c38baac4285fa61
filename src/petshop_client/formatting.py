"""Display helpers for prices and booking slots."""

from datetime import date, datetime


def format_rupiah(amount: float) -> str:
    """Format an amount as Indonesian Rupiah without decimals."""
    rounded = round(amount)
    sign = "-" if rounded < 0 else ""
    grouped = f"{abs(rounded):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_booking_time(value: str) -> str:
    """Turn ``HH:MM[:SS]`` into a 12-hour clock label."""
    hours, minutes = value.split(":")[:2]
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"  # noqa: PLR2004
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minutes} {suffix}"


def format_booking_date(value: str | date) -> str:
    """Format a booking date like ``Monday, January 1, 2024``."""
    day = value if isinstance(value, date) else datetime.fromisoformat(value).date()
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"
