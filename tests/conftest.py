import pytest

from projectcpm.model import Dependency, DependencyType, Task


def make_task(id, start, end, deps=(), parent=None, progress=0, order=None, milestone=False):
    """Short task builder; ``deps`` holds ids (FS) or (id, type) pairs."""
    dependencies = []
    for d in deps:
        if isinstance(d, tuple):
            dependencies.append(Dependency(d[0], DependencyType(d[1])))
        else:
            dependencies.append(Dependency(d))
    return Task.from_record({
        'id': id, 'name': id.upper(), 'startDate': start, 'endDate': end,
        'dependencies': dependencies, 'parentId': parent, 'progress': progress,
        'orderIndex': order, 'isMilestone': milestone,
    })


@pytest.fixture
def chain():
    """A -> B -> C finish-to-start chain with gaps of 0 and 1 day."""
    return [
        make_task('a', '2024-01-01', '2024-01-10'),
        make_task('b', '2024-01-10', '2024-01-20', deps=['a']),
        make_task('c', '2024-01-21', '2024-01-25', deps=['b']),
    ]
