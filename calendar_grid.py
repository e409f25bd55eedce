"""
Month grid layout and event badges

Months are addressed by year and zero-based month index (0 = January).
Weeks start on Sunday.
"""
import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Tuple

GRID_SIZE = 42

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Badge presentation
BADGE_TEXT_LIMIT = 15
BADGE_TRUNCATE_AT = 12
BADGE_MAX_TEXT_EVENTS = 2
BADGE_MAX_DOTS = 5
ELLIPSIS = "..."


@dataclass(frozen=True)
class CalendarCell:
    """One of the 42 day positions of the month grid"""
    day: int
    is_current_month: bool
    date_key: str
    date: date
    is_today: bool = False


@dataclass(frozen=True)
class EventBadge:
    """Compact summary of a day's events shown inside its cell"""
    texts: List[str] = field(default_factory=list)
    dots: int = 0


def date_key(day: date) -> str:
    """Format a date as YYYY-MM-DD"""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def shift_month(year: int, month_index: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month_index) pair by delta months"""
    total = year * 12 + month_index + delta
    return total // 12, total % 12


def days_in_month(year: int, month_index: int) -> int:
    return calendar.monthrange(year, month_index + 1)[1]


def first_weekday(year: int, month_index: int) -> int:
    """Weekday of the first of the month, 0 = Sunday .. 6 = Saturday"""
    # calendar counts Monday as 0
    return (calendar.monthrange(year, month_index + 1)[0] + 1) % 7


def month_title(year: int, month_index: int) -> str:
    return f"{calendar.month_name[month_index + 1]} {year}"


def format_long_date(day: date) -> str:
    """e.g. Friday, March 15, 2024"""
    return f"{calendar.day_name[day.weekday()]}, {calendar.month_name[day.month]} {day.day}, {day.year}"


def build_month_grid(year: int, month_index: int,
                     today: Optional[date] = None) -> List[CalendarCell]:
    """
    Lay out the 42 cells shown for a month

    The grid starts with the trailing days of the previous month, then every
    day of the month, and is padded with the first days of the next month.
    Six weeks are always produced, even for months that fit in five.

    Args:
        year: Displayed year
        month_index: Displayed month, 0-11
        today: Date highlighted as today, defaults to the local current date

    Returns:
        List of 42 CalendarCell
    """
    if today is None:
        today = date.today()

    leading = first_weekday(year, month_index)
    month_days = days_in_month(year, month_index)
    prev_year, prev_month = shift_month(year, month_index, -1)
    next_year, next_month = shift_month(year, month_index, 1)
    prev_month_days = days_in_month(prev_year, prev_month)

    cells = []
    day_count = 1
    next_month_day = 1

    for i in range(GRID_SIZE):
        if i < leading:
            day_number = prev_month_days - leading + i + 1
            cell_date = date(prev_year, prev_month + 1, day_number)
            cells.append(CalendarCell(day_number, False, date_key(cell_date), cell_date))
        elif day_count <= month_days:
            cell_date = date(year, month_index + 1, day_count)
            cells.append(CalendarCell(day_count, True, date_key(cell_date), cell_date,
                                      is_today=(cell_date == today)))
            day_count += 1
        else:
            cell_date = date(next_year, next_month + 1, next_month_day)
            cells.append(CalendarCell(next_month_day, False, date_key(cell_date), cell_date))
            next_month_day += 1

    return cells


def truncate_event_text(text: str) -> str:
    if len(text) > BADGE_TEXT_LIMIT:
        return text[:BADGE_TRUNCATE_AT] + ELLIPSIS
    return text


def summarize_events(events: Sequence[str]) -> EventBadge:
    """
    Summarize a day's events for its cell

    One or two events are shown as (truncated) text; three or more become
    indicator dots, at most BADGE_MAX_DOTS of them.
    """
    if not events:
        return EventBadge()

    if len(events) <= BADGE_MAX_TEXT_EVENTS:
        return EventBadge(texts=[truncate_event_text(e) for e in events])

    return EventBadge(dots=min(len(events), BADGE_MAX_DOTS))
