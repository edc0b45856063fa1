from datetime import date
from typing import Iterable, List, Optional

import pandas as pd

from .config import Settings
from .hierarchy import flatten
from .model import Dependency, DependencyType, Task
from .schedule import critical_path, is_overdue

OUTLINE_COLUMNS = ['id', 'name', 'level', 'has_children', 'start_date', 'end_date',
                   'duration', 'progress', 'critical', 'overdue']


def parse_dependencies(cell) -> List[Dependency]:
    """``"t1:FS, t2:SS, t3"`` (type defaults to FS) or a list of records."""
    if cell is None:
        return []
    if isinstance(cell, (list, tuple)):
        deps = [d if isinstance(d, Dependency) else Dependency.from_record(d) for d in cell]
        return [d for d in deps if d is not None]
    if not isinstance(cell, str) or not cell.strip():
        return []
    deps = []
    for part in cell.split(','):
        part = part.strip()
        if not part: continue
        tid, _, typ = part.partition(':')
        dep = Dependency.from_record({'taskId': tid.strip(), 'type': typ.strip() or DependencyType.FS.value})
        if dep is not None: deps.append(dep)
    return deps


def _clean(value):
    if isinstance(value, (list, tuple)):
        return value
    return None if pd.isna(value) else value


def tasks_from_frame(df: pd.DataFrame) -> List[Task]:
    tasks = []
    for _, row in df.iterrows():
        record = {k: _clean(v) for k, v in row.items()}
        record['dependencies'] = parse_dependencies(record.get('dependencies'))
        for key in ('duration', 'progress', 'orderIndex', 'order_index'):
            if record.get(key) is not None: record[key] = int(record[key])
        tasks.append(Task.from_record(record))
    return tasks


def outline_frame(tasks: Iterable[Task], collapsed: Iterable[str] = (), today: Optional[date] = None,
                  settings: Optional[Settings] = None) -> pd.DataFrame:
    tasks = list(tasks)
    critical = critical_path(tasks, settings=settings)
    rows = []
    for row in flatten(tasks, collapsed):
        t = row.task
        rows.append({
            'id': t.id, 'name': t.name, 'level': row.level, 'has_children': row.has_children,
            'start_date': t.start_date, 'end_date': t.end_date,
            'duration': t.duration, 'progress': t.progress,
            'critical': t.id in critical,
            # summaries are never flagged overdue
            'overdue': (not row.has_children and today is not None and is_overdue(t, today)),
        })
    return pd.DataFrame(rows, columns=OUTLINE_COLUMNS)
