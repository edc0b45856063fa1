from projectcpm.model import Dependency, DependencyType, Task, has_children, parent_ids


def test_from_camel_case_record():
    t = Task.from_record({
        'id': 't2', 'projectId': 'p1', 'name': 'Build', 'startDate': '2024-01-16', 'endDate': '2024-02-28',
        'progress': 45, 'dependencies': [{'taskId': 't1', 'type': 'FS'}], 'isMilestone': False,
        'parentId': 'wbs', 'orderIndex': 3,
    })
    assert t.duration == 43
    assert t.dependencies == [Dependency('t1', DependencyType.FS)]
    assert (t.parent_id, t.order_index, t.project_id) == ('wbs', 3, 'p1')
    assert not t.is_complete


def test_from_snake_case_record_keeps_explicit_duration():
    t = Task.from_record({'id': 'x', 'start_date': '2024-01-01', 'end_date': '2024-01-03', 'duration': 9,
                          'dependencies': [{'predecessor_id': 'y', 'type': 'ss'}], 'progress': 100})
    assert t.duration == 9
    assert t.dependencies[0].type is DependencyType.SS
    assert t.is_complete


def test_milestone_takes_start_as_end():
    t = Task.from_record({'id': 'm', 'startDate': '2024-03-01', 'isMilestone': True})
    assert (t.end_date, t.duration) == ('2024-03-01', 0)


def test_bad_durations_become_zero():
    assert Task.from_record({'id': 'a', 'startDate': '2024-01-05', 'endDate': '2024-01-01'}).duration == 0
    assert Task.from_record({'id': 'a', 'startDate': 'x', 'endDate': '2024-01-01'}).duration == 0


def test_invalid_dependency_records_are_dropped():
    t = Task.from_record({'id': 'a', 'dependencies': [{'type': 'FS'}, {'taskId': 'b', 'type': 'XX'},
                                                      {'predecessorTaskId': 'c'}]})
    assert t.dependencies == [Dependency('c', DependencyType.FS)]


def test_to_record_round_trip():
    rec = {'id': 'a', 'name': 'A', 'startDate': '2024-01-01', 'endDate': '2024-01-04', 'duration': 3,
           'progress': 10, 'dependencies': [{'taskId': 'z', 'type': 'FF'}], 'isMilestone': False,
           'parentId': 'p', 'orderIndex': 0}
    assert Task.from_record(rec).to_record() == rec


def test_with_dates_recomputes_duration():
    t = Task('a', start_date='2024-01-01', end_date='2024-01-02', duration=1, progress=20)
    moved = t.with_dates('2024-01-10', '2024-01-20')
    assert (moved.duration, moved.progress, t.start_date) == (10, 20, '2024-01-01')


def test_parent_helpers():
    tasks = [Task('p'), Task('c', parent_id='p'), Task('o', parent_id='gone')]
    assert parent_ids(tasks) == {'p', 'gone'}
    assert has_children(tasks[0], tasks)
    assert not has_children(tasks[1], tasks)
