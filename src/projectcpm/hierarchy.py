from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List

from .model import Task


@dataclass(frozen=True)
class OutlineRow:
    task: Task
    level: int
    has_children: bool


def _order(task: Task) -> int:
    return task.order_index or 0


def children_index(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    tasks = list(tasks)
    known = {t.id for t in tasks}
    index: Dict[str, List[Task]] = {}
    for t in tasks:
        if t.parent_id is not None and t.parent_id in known:
            index.setdefault(t.parent_id, []).append(t)
    return index


def flatten(tasks: Iterable[Task], collapsed: Iterable[str] = ()) -> List[OutlineRow]:
    """
    Depth-first, pre-order outline of the task hierarchy.

    A task whose parent is unknown is treated as a root. Siblings are ordered
    by ``order_index`` (missing counts as 0, ties keep input order). The
    subtree under a collapsed task is left out entirely.
    """
    tasks = list(tasks)
    collapsed = set(collapsed)
    index = children_index(tasks)
    known = {t.id for t in tasks}
    roots = sorted((t for t in tasks if t.parent_id is None or t.parent_id not in known), key=_order)
    for kids in index.values():
        kids.sort(key=_order)

    rows: List[OutlineRow] = []
    seen = set()

    def visit(task: Task, level: int):
        if task.id in seen:
            return
        seen.add(task.id)
        kids = index.get(task.id, [])
        rows.append(OutlineRow(task, level, bool(kids)))
        if task.id in collapsed:
            return
        for child in kids:
            visit(child, level + 1)

    for root in roots:
        visit(root, 0)
    return rows


def toggle_collapsed(collapsed: Iterable[str], task_id: str) -> FrozenSet[str]:
    current = set(collapsed)
    if task_id in current:
        current.discard(task_id)
    else:
        current.add(task_id)
    return frozenset(current)
