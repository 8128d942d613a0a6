"""Date manipulation utilities"""

from datetime import date


def month_key(day: date) -> str:
    """Calendar month label in YYYY-MM form"""
    return f"{day.year:04d}-{day.month:02d}"


def month_index(day: date) -> int:
    """Zero-based calendar month (January = 0)"""
    return day.month - 1


def add_months(from_date: date, months: int) -> date:
    """First day of the month `months` after the month containing from_date"""
    total = from_date.year * 12 + (from_date.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def subtract_months(from_date: date, months: int) -> date:
    """Same day `months` earlier, clamped to the end of shorter months"""
    first = add_months(from_date, -months)
    for day in (from_date.day, 30, 29, 28):
        try:
            return first.replace(day=day)
        except ValueError:
            continue
    return first
