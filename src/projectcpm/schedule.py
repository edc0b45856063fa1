import logging
from collections import deque
from datetime import date
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .config import DEFAULT_SETTINGS, Settings
from .dates import days_diff, try_parse_local_date
from .model import DependencyType, Task, parent_ids

logger = logging.getLogger(__name__)


def _threshold(threshold: Optional[int], settings: Optional[Settings]) -> int:
    if threshold is not None: return threshold
    return (settings or DEFAULT_SETTINGS).slack_threshold_days


def project_end(tasks: Iterable[Task]) -> Optional[date]:
    ends = [d for d in (try_parse_local_date(t.end_date) for t in tasks) if d is not None]
    return max(ends) if ends else None


def dependency_slack(pred: Task, succ: Task, dep_type: DependencyType) -> Optional[int]:
    """Days between the anchors a link joins; None for SF or unparseable dates."""
    if dep_type == DependencyType.FS:
        a, b = pred.end_date, succ.start_date
    elif dep_type == DependencyType.SS:
        a, b = pred.start_date, succ.start_date
    elif dep_type == DependencyType.FF:
        a, b = pred.end_date, succ.end_date
    else:
        return None
    a, b = try_parse_local_date(a), try_parse_local_date(b)
    if a is None or b is None:
        return None
    return days_diff(a, b)


def critical_path(tasks: Iterable[Task], threshold: Optional[int] = None,
                  settings: Optional[Settings] = None) -> Set[str]:
    """Walk back from the last finishers through links with slack <= threshold."""
    tasks = list(tasks or [])
    if not tasks:
        return set()
    limit = _threshold(threshold, settings)
    by_id = {t.id: t for t in tasks}

    end = project_end(tasks)
    if end is None:
        logger.warning(f"No task among {len(tasks)} has a valid end date, critical path is empty")
        return set()

    queue = deque(t.id for t in tasks if try_parse_local_date(t.end_date) == end)
    visited: Set[str] = set()
    critical: Set[str] = set()
    while queue:
        current_id = queue.popleft()
        if current_id in visited:
            continue
        visited.add(current_id)
        current = by_id.get(current_id)
        if current is None:
            continue
        critical.add(current_id)
        for dep in current.dependencies:
            pred = by_id.get(dep.task_id)
            if pred is None:
                logger.debug(f"Task {current_id} depends on unknown task {dep.task_id}, ignored")
                continue
            slack = dependency_slack(pred, current, dep.type)
            if slack is not None and slack <= limit:
                queue.append(pred.id)

    _propagate_to_summaries(tasks, critical)
    logger.debug(f"Critical path: {len(critical)} of {len(tasks)} tasks")
    return critical


def _propagate_to_summaries(tasks: List[Task], critical: Set[str]):
    # repeat until stable so nested summaries pick up grandchildren marked in the same pass
    known = {t.id for t in tasks}
    changed = True
    while changed:
        changed = False
        for t in tasks:
            if t.parent_id in known and t.id in critical and t.parent_id not in critical:
                critical.add(t.parent_id)
                changed = True


def critical_links(tasks: Iterable[Task], critical: Optional[Set[str]] = None,
                   threshold: Optional[int] = None,
                   settings: Optional[Settings] = None) -> Dict[Tuple[str, str], bool]:
    """(pred, succ) -> True when both ends are critical and the FS gap is within the threshold."""
    tasks = list(tasks or [])
    limit = _threshold(threshold, settings)
    if critical is None:
        critical = critical_path(tasks, threshold=limit)
    by_id = {t.id: t for t in tasks}
    links = {}
    for task in tasks:
        start = try_parse_local_date(task.start_date)
        for dep in task.dependencies:
            pred = by_id.get(dep.task_id)
            if pred is None: continue
            pred_end = try_parse_local_date(pred.end_date)
            if pred_end is None or start is None: continue
            links[(pred.id, task.id)] = (task.id in critical and pred.id in critical
                                         and days_diff(pred_end, start) <= limit)
    return links


def is_overdue(task: Task, today: date) -> bool:
    if task.is_complete:
        return False
    end = try_parse_local_date(task.end_date)
    return end is not None and end < today


def overdue_ids(tasks: Iterable[Task], today: date) -> Set[str]:
    tasks = list(tasks or [])
    summaries = parent_ids(tasks)
    return {t.id for t in tasks if t.id not in summaries and is_overdue(t, today)}
