from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional

from .config import Settings
from .dates import add_days, days_diff, format_date, try_parse_local_date
from .model import Task
from .schedule import critical_path, overdue_ids, project_end

MAX_FORECAST_DAYS = 365 * 100


@dataclass(frozen=True)
class Forecast:
    date: Optional[date]
    status: str  # invalid | complete | on-plan | ahead | late | too-slow
    days_variance: int = 0


def average_progress(tasks: Iterable[Task]) -> float:
    tasks = list(tasks)
    return sum(t.progress for t in tasks) / len(tasks) if tasks else 0.0


def completion_forecast(tasks: Iterable[Task], project_start: str, planned_end: str,
                        today: date) -> Forecast:
    """Linear forecast from average progress; ``days_variance`` > 0 means late."""
    start, end = try_parse_local_date(project_start), try_parse_local_date(planned_end)
    if start is None or end is None:
        return Forecast(None, 'invalid')
    progress = average_progress(tasks)
    if progress >= 100:
        return Forecast(None, 'complete')
    if progress <= 0:
        return Forecast(end, 'on-plan')
    elapsed = max(1, days_diff(start, today))
    total_days = 100 / (progress / elapsed)
    if total_days > MAX_FORECAST_DAYS:
        return Forecast(None, 'too-slow')
    forecast = add_days(start, round(total_days))
    variance = days_diff(end, forecast)
    return Forecast(forecast, 'late' if variance > 0 else 'ahead', variance)


def baseline_slip(tasks: Iterable[Task], baseline: Iterable[Task]) -> Dict[str, int]:
    """Days each task's end moved against its baseline copy (positive = later)."""
    base = {t.id: try_parse_local_date(t.end_date) for t in baseline}
    slip = {}
    for t in tasks:
        if t.id not in base: continue
        cur = try_parse_local_date(t.end_date)
        if cur is None or base[t.id] is None: continue
        slip[t.id] = days_diff(base[t.id], cur)
    return slip


def compute_kpis(tasks: Iterable[Task], today: date,
                 settings: Optional[Settings] = None) -> dict:
    tasks = list(tasks)
    starts = [d for d in (try_parse_local_date(t.start_date) for t in tasks) if d is not None]
    completed = sum(1 for t in tasks if t.is_complete)
    return {
        'task_count': len(tasks),
        'completed': completed,
        'open': len(tasks) - completed,
        'average_progress': round(average_progress(tasks), 2),
        'project_start': format_date(min(starts)) if starts else '',
        'project_end': format_date(project_end(tasks)),
        'critical_tasks': sorted(critical_path(tasks, settings=settings)),
        'overdue_tasks': sorted(overdue_ids(tasks, today)),
    }
