"""Drag-to-reschedule for Gantt bars: IDLE -> DRAGGING -> IDLE, preview until commit."""
import logging
import math
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional

from .config import DEFAULT_SETTINGS, Settings
from .dates import add_days, days_diff, format_date, try_parse_local_date
from .errors import DragStateError
from .model import Task

logger = logging.getLogger(__name__)


class DragMode(str, Enum):
    MOVE = 'move'
    RESIZE_LEFT = 'resize-left'
    RESIZE_RIGHT = 'resize-right'


class DragState(str, Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'


@dataclass(frozen=True)
class DragPreview:
    task_id: str
    start_date: str
    end_date: str
    duration: int


@dataclass(frozen=True)
class CommittedChange:
    task: Task
    previous: Task


def shift_dates(mode: DragMode, start: date, end: date, days: int):
    """New (start, end) for a drag of ``days``; a resize never crosses the other edge."""
    mode = DragMode(mode)
    if mode is DragMode.MOVE:
        # stop at the calendar edge so the bar keeps its length
        days = max(min(days, days_diff(end, date.max)), days_diff(start, date.min))
        return add_days(start, days), add_days(end, days)
    if mode is DragMode.RESIZE_LEFT:
        new_start = add_days(start, days)
        return (end if new_start > end else new_start), end
    new_end = add_days(end, days)
    return start, (start if new_end < start else new_end)


class DragSession:
    def __init__(self, pixels_per_day: Optional[float] = None,
                 on_commit: Optional[Callable[[Task], None]] = None,
                 settings: Optional[Settings] = None):
        settings = settings or DEFAULT_SETTINGS
        self.pixels_per_day = float(pixels_per_day if pixels_per_day is not None else settings.day_width)
        if self.pixels_per_day <= 0:
            raise ValueError('pixels_per_day must be positive')
        self.on_commit = on_commit
        self._reset()

    def _reset(self):
        self.mode: Optional[DragMode] = None
        self.task: Optional[Task] = None
        self.origin_x = 0.0
        self._start: Optional[date] = None
        self._end: Optional[date] = None
        self.preview: Optional[DragPreview] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self.task is not None else DragState.IDLE

    def begin(self, mode, task: Task, pointer_x: float, summary_ids: Iterable[str] = ()) -> bool:
        if self.task is not None:
            raise DragStateError(f"Task {self.task.id} is already being dragged")
        if task.id in set(summary_ids):
            logger.debug(f"Summary task {task.id} cannot be dragged")
            return False
        start, end = try_parse_local_date(task.start_date), try_parse_local_date(task.end_date)
        if start is None or end is None:
            logger.warning(f"Task {task.id} has unparseable dates, drag refused")
            return False
        self.mode = DragMode(mode)
        self.task = task
        self.origin_x = float(pointer_x)
        self._start, self._end = start, end
        return True

    def update(self, pointer_x: float) -> Optional[DragPreview]:
        if self.task is None:
            return None
        # half-up rounding
        days = math.floor((float(pointer_x) - self.origin_x) / self.pixels_per_day + 0.5)
        if days == 0 and self.preview is None:
            return None
        start, end = shift_dates(self.mode, self._start, self._end, days)
        self.preview = DragPreview(self.task.id, format_date(start), format_date(end), days_diff(start, end))
        return self.preview

    def commit(self) -> Optional[CommittedChange]:
        task, preview = self.task, self.preview
        self._reset()
        if task is None or preview is None:
            return None
        updated = replace(task, start_date=preview.start_date, end_date=preview.end_date,
                          duration=preview.duration)
        if self.on_commit is not None:
            self.on_commit(updated)
        return CommittedChange(updated, task)

    def cancel(self):
        self._reset()
