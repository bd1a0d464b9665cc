"""Default date window for transaction questions."""
from datetime import date, datetime, timezone
from typing import Optional

from moneycoach.coach.schemas import DateRange


def utc_today() -> date:
    """Current date in UTC."""
    return datetime.now(timezone.utc).date()


def one_year_before(day: date) -> date:
    """
    Same month and day, one calendar year earlier.

    29 February has no counterpart in a non-leap year and rolls over to
    1 March.
    """
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return date(day.year - 1, 3, 1)


def default_date_range(today: Optional[date] = None) -> DateRange:
    """Trailing 12-month window ending today."""
    end = today or utc_today()
    return DateRange(start=one_year_before(end), end=end)


def resolve_date_range(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> DateRange:
    """Fill whichever bound the caller left out from the default window."""
    default = default_date_range(today)
    return DateRange(
        start=start_date or default.start,
        end=end_date or default.end,
    )
