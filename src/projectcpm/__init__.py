import logging

from .config import DEFAULT_SETTINGS, Settings
from .dates import add_days, days_diff, format_date, parse_local_date, try_parse_local_date
from .drag import CommittedChange, DragMode, DragPreview, DragSession, DragState
from .errors import (ConfigError, CycleError, DanglingDependencyReference, DragStateError,
                     InvalidDateInput, InvertedDateRange, ScheduleError, SelfDependencyError)
from .graph import TaskIssue, assert_well_formed, check_tasks, dependency_graph, find_cycles
from .hierarchy import OutlineRow, children_index, flatten, toggle_collapsed
from .model import Dependency, DependencyType, Task, has_children, parent_ids
from .schedule import (critical_links, critical_path, dependency_slack, is_overdue,
                       overdue_ids, project_end)

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
