import math
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_SETTINGS, Settings
from .dates import add_days, days_diff, try_parse_local_date
from .model import Task


class ViewMode(str, Enum):
    DAY = 'day'
    WEEK = 'week'
    MONTH = 'month'
    YEAR = 'year'


# pixels per day for each zoom preset
DAY_WIDTHS = {
    ViewMode.DAY: 40.0,
    ViewMode.WEEK: 15.0,
    ViewMode.MONTH: 5.0,
    ViewMode.YEAR: 1.5,
}


def day_width_for(mode) -> float:
    return DAY_WIDTHS[ViewMode(mode)]


def zoom_in(day_width: float, settings: Optional[Settings] = None) -> float:
    s = settings or DEFAULT_SETTINGS
    return min(day_width * s.zoom_factor, s.max_day_width)


def zoom_out(day_width: float, settings: Optional[Settings] = None) -> float:
    s = settings or DEFAULT_SETTINGS
    return max(day_width / s.zoom_factor, s.min_day_width)


def timeline_bounds(tasks: Iterable[Task], day_width: float, today: date,
                    settings: Optional[Settings] = None) -> Tuple[date, date]:
    """First and last day drawn: a short lead, and a trailing margin of ``trail_margin_px``."""
    s = settings or DEFAULT_SETTINGS
    dates = []
    for t in tasks:
        for text in (t.start_date, t.end_date):
            d = try_parse_local_date(text)
            if d is not None: dates.append(d)
    if not dates:
        return today, today
    trail = max(s.min_trail_margin_days, math.ceil(s.trail_margin_px / max(day_width, 0.1)))
    return add_days(min(dates), -s.lead_margin_days), add_days(max(dates), trail)


def timeline_days(start: date, end: date, settings: Optional[Settings] = None) -> List[date]:
    s = settings or DEFAULT_SETTINGS
    total = min(max(days_diff(start, end), 0), s.max_timeline_days)
    return [add_days(start, i) for i in range(total + 1)]


def day_offset(origin: date, value: date, day_width: float) -> float:
    return days_diff(origin, value) * day_width
