import calendar
from datetime import date
from typing import Iterable, Tuple

from models.payroll import CalendarFacts
from utils.validators import parse_year_month
from config.tax_tables import FIXED_HOLIDAYS_BR


def count_calendar_facts(year_month: str,
                         holidays: Iterable[Tuple[int, int]] = FIXED_HOLIDAYS_BR) -> CalendarFacts:
    """Count rest days (Sundays + fixed holidays) and working days of a month.

    A holiday falling on a Sunday is only counted once, as a Sunday.
    """
    year, month = parse_year_month(year_month)
    total_days = calendar.monthrange(year, month)[1]
    holiday_days = {day for (m, day) in holidays if m == month}

    sundays = 0
    weekday_holidays = []
    for day in range(1, total_days + 1):
        if date(year, month, day).weekday() == calendar.SUNDAY:
            sundays += 1
        elif day in holiday_days:
            weekday_holidays.append(day)

    rest_days = sundays + len(weekday_holidays)

    return CalendarFacts(
        year_month=f"{year:04d}-{month:02d}",
        total_days=total_days,
        rest_days=rest_days,
        working_days=total_days - rest_days,
        holidays=tuple(weekday_holidays)
    )
