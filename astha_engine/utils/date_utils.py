"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import List, Union


def period_key(moment: Union[date, datetime]) -> str:
    """Year-month key used to bucket transactions, e.g. '2025-09'"""
    return f"{moment.year}-{moment.month:02d}"


def add_months(from_date: date, months: int) -> date:
    """First day of the month `months` after from_date's month"""
    index = from_date.year * 12 + (from_date.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def recent_periods(count: int, today: date | None = None) -> List[str]:
    """Last `count` period keys ending with the current month, oldest first"""
    today = today or date.today()
    return [period_key(add_months(today, -i)) for i in reversed(range(count))]


def month_label(moment: date) -> str:
    """Short chart label, e.g. 'Sep 25'"""
    return f"{calendar.month_abbr[moment.month]} {moment.year % 100:02d}"


def days_until(due_day: int, today: date | None = None) -> int:
    """
    Days until the next occurrence of a monthly due day.

    A due day that already passed this month rolls to next month. Due days past
    the end of a short month fall on its last day.
    """
    today = today or date.today()
    target = _clamped(today.year, today.month, due_day)
    if target < today:
        following = add_months(today, 1)
        target = _clamped(following.year, following.month, due_day)
    return (target - today).days


def _clamped(year: int, month: int, day: int) -> date:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))
