import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Set

from .dates import days_diff, try_parse_local_date

logger = logging.getLogger(__name__)


class DependencyType(str, Enum):
    FS = 'FS'  # finish-to-start
    SS = 'SS'  # start-to-start
    FF = 'FF'  # finish-to-finish
    SF = 'SF'  # start-to-finish, stored but never evaluated


_DEP_ID_KEYS = ('taskId', 'predecessorTaskId', 'task_id', 'predecessor_id')


def _pick(record, *keys, default=None):
    for k in keys:
        if k in record and record[k] is not None:
            return record[k]
    return default


@dataclass(frozen=True)
class Dependency:
    task_id: str
    type: DependencyType = DependencyType.FS

    @classmethod
    def from_record(cls, record) -> Optional['Dependency']:
        task_id = _pick(record, *_DEP_ID_KEYS)
        if task_id is None or str(task_id).strip() == '':
            logger.warning(f"Dependency record without a predecessor id: {record!r}")
            return None
        raw_type = str(_pick(record, 'type', default='FS')).strip().upper()
        try:
            dep_type = DependencyType(raw_type)
        except ValueError:
            logger.warning(f"Unknown dependency type {raw_type!r} on predecessor {task_id}")
            return None
        return cls(str(task_id).strip(), dep_type)


@dataclass
class Task:
    id: str
    name: str = ""
    start_date: str = ""
    end_date: str = ""
    duration: int = 0
    progress: int = 0
    dependencies: List[Dependency] = field(default_factory=list)
    parent_id: Optional[str] = None
    is_milestone: bool = False
    order_index: Optional[int] = None
    project_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.progress >= 100

    def with_dates(self, start_date: str, end_date: str) -> 'Task':
        return replace(self, start_date=start_date, end_date=end_date,
                       duration=_derive_duration(start_date, end_date))

    @classmethod
    def from_record(cls, record) -> 'Task':
        """Build a task from a plain record using camelCase or snake_case keys."""
        is_milestone = bool(_pick(record, 'isMilestone', 'is_milestone', default=False))
        start = str(_pick(record, 'startDate', 'start_date', default='')).strip()
        end = str(_pick(record, 'endDate', 'end_date', default='')).strip()
        if is_milestone and not end:
            end = start
        duration = _pick(record, 'duration')
        duration = _derive_duration(start, end) if duration is None else int(duration)
        deps = []
        for raw in _pick(record, 'dependencies', default=[]) or []:
            dep = raw if isinstance(raw, Dependency) else Dependency.from_record(raw)
            if dep is not None: deps.append(dep)
        parent = _pick(record, 'parentId', 'parent_id')
        order = _pick(record, 'orderIndex', 'order_index')
        project = _pick(record, 'projectId', 'project_id')
        return cls(
            id=str(record['id']).strip(),
            name=str(_pick(record, 'name', default='')),
            start_date=start,
            end_date=end,
            duration=duration,
            progress=int(_pick(record, 'progress', default=0)),
            dependencies=deps,
            parent_id=str(parent) if parent not in (None, '') else None,
            is_milestone=is_milestone,
            order_index=int(order) if order is not None else None,
            project_id=str(project) if project is not None else None,
        )

    def to_record(self) -> dict:
        rec = {
            'id': self.id, 'name': self.name,
            'startDate': self.start_date, 'endDate': self.end_date,
            'duration': self.duration, 'progress': self.progress,
            'dependencies': [{'taskId': d.task_id, 'type': d.type.value} for d in self.dependencies],
            'isMilestone': self.is_milestone,
        }
        if self.parent_id is not None: rec['parentId'] = self.parent_id
        if self.order_index is not None: rec['orderIndex'] = self.order_index
        if self.project_id is not None: rec['projectId'] = self.project_id
        return rec


def _derive_duration(start: str, end: str) -> int:
    s, e = try_parse_local_date(start), try_parse_local_date(end)
    if s is None or e is None:
        return 0
    return max(0, days_diff(s, e))


def parent_ids(tasks: Iterable[Task]) -> Set[str]:
    """Ids referenced as a parent by at least one task."""
    return {t.parent_id for t in tasks if t.parent_id is not None}


def has_children(task: Task, tasks: Iterable[Task]) -> bool:
    return any(t.parent_id == task.id for t in tasks)
