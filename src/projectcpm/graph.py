"""Dependency graph construction and well-formedness checks."""
import logging
from dataclasses import dataclass
from typing import Iterable, List

import networkx as nx

from .dates import try_parse_local_date
from .errors import (CycleError, DanglingDependencyReference, InvalidDateInput,
                     InvertedDateRange, SelfDependencyError)
from .model import Task

logger = logging.getLogger(__name__)

_ERRORS = {
    'invalid-date': InvalidDateInput,
    'inverted-dates': InvertedDateRange,
    'self-dependency': SelfDependencyError,
    'dangling-dependency': DanglingDependencyReference,
    'dependency-cycle': CycleError,
}


@dataclass(frozen=True)
class TaskIssue:
    task_id: str
    code: str
    message: str

    def to_exception(self):
        return _ERRORS[self.code](self.message)


def dependency_graph(tasks: Iterable[Task]) -> nx.DiGraph:
    """Predecessor -> successor graph; edges carry the dependency ``type``."""
    G = nx.DiGraph()
    tasks = list(tasks)
    for t in tasks:
        G.add_node(t.id, task=t)
    for t in tasks:
        for dep in t.dependencies:
            if dep.task_id not in G:
                logger.debug(f"Skipping dangling dependency {dep.task_id} -> {t.id}")
                continue
            G.add_edge(dep.task_id, t.id, type=dep.type)
    return G


def find_cycles(tasks: Iterable[Task]) -> List[List[str]]:
    return [list(c) for c in nx.simple_cycles(dependency_graph(tasks))]


def check_tasks(tasks: Iterable[Task]) -> List[TaskIssue]:
    tasks = list(tasks)
    known = {t.id for t in tasks}
    issues = []
    for t in tasks:
        start, end = try_parse_local_date(t.start_date), try_parse_local_date(t.end_date)
        if start is None or end is None:
            issues.append(TaskIssue(t.id, 'invalid-date',
                                    f"Task {t.id} has an unparseable date ({t.start_date!r}, {t.end_date!r})"))
        elif start > end:
            issues.append(TaskIssue(t.id, 'inverted-dates',
                                    f"Task {t.id} starts {t.start_date} after it ends {t.end_date}"))
        for dep in t.dependencies:
            if dep.task_id == t.id:
                issues.append(TaskIssue(t.id, 'self-dependency', f"Task {t.id} depends on itself"))
            elif dep.task_id not in known:
                issues.append(TaskIssue(t.id, 'dangling-dependency',
                                        f"Task {t.id} depends on missing task {dep.task_id}"))
    for cycle in find_cycles(tasks):
        if len(cycle) < 2:
            continue  # self loops are reported above
        path = ' -> '.join(cycle + [cycle[0]])
        issues.append(TaskIssue(cycle[0], 'dependency-cycle', f"Dependency cycle: {path}"))
    if issues:
        logger.info(f"{len(issues)} issue(s) found in {len(tasks)} tasks")
    return issues


def assert_well_formed(tasks: Iterable[Task]):
    issues = check_tasks(tasks)
    if issues:
        raise issues[0].to_exception()
