"""Drag-to-reschedule gestures."""
import pytest
from conftest import make_task

from projectcpm.drag import CommittedChange, DragMode, DragPreview, DragSession, DragState, shift_dates
from projectcpm.errors import DragStateError

PX = 40.0


@pytest.fixture
def task():
    return make_task('t', '2024-02-01', '2024-02-05', progress=30)


def test_move_keeps_duration(task):
    s = DragSession(pixels_per_day=PX)
    assert s.begin('move', task, 100)
    preview = s.update(100 + 3 * PX)
    assert preview == DragPreview('t', '2024-02-04', '2024-02-08', 4)
    assert task.start_date == '2024-02-01'


def test_resize_left_clamps_to_end(task):
    s = DragSession(pixels_per_day=PX)
    s.begin(DragMode.RESIZE_LEFT, task, 0)
    preview = s.update(6 * PX)
    assert (preview.start_date, preview.end_date, preview.duration) == ('2024-02-05', '2024-02-05', 0)


def test_resize_right_clamps_to_start(task):
    s = DragSession(pixels_per_day=PX)
    s.begin(DragMode.RESIZE_RIGHT, task, 0)
    assert s.update(-10 * PX).end_date == '2024-02-01'
    assert s.update(2 * PX) == DragPreview('t', '2024-02-01', '2024-02-07', 6)


def test_sub_day_jitter_produces_nothing(task):
    s = DragSession(pixels_per_day=PX)
    s.begin('move', task, 0)
    assert s.update(PX * 0.4) is None
    assert s.preview is None


def test_back_to_origin_after_preview_restores_dates(task):
    s = DragSession(pixels_per_day=PX)
    s.begin('move', task, 0)
    s.update(2 * PX)
    assert s.update(5) == DragPreview('t', '2024-02-01', '2024-02-05', 4)


def test_commit_hands_updated_task_to_callback(task):
    seen = []
    s = DragSession(pixels_per_day=PX, on_commit=seen.append)
    s.begin('move', task, 0)
    s.update(3 * PX)
    change = s.commit()
    assert isinstance(change, CommittedChange)
    assert change.previous is task
    assert (change.task.start_date, change.task.end_date, change.task.duration) == ('2024-02-04', '2024-02-08', 4)
    assert change.task.progress == 30 and change.task.name == task.name
    assert seen == [change.task]
    assert s.state is DragState.IDLE


def test_commit_without_preview_just_resets(task):
    seen = []
    s = DragSession(pixels_per_day=PX, on_commit=seen.append)
    s.begin('move', task, 0)
    assert s.state is DragState.DRAGGING
    assert s.commit() is None
    assert seen == [] and s.state is DragState.IDLE


def test_cancel_discards_preview(task):
    seen = []
    s = DragSession(pixels_per_day=PX, on_commit=seen.append)
    s.begin('move', task, 0)
    s.update(4 * PX)
    s.cancel()
    assert s.commit() is None and seen == []


def test_only_one_gesture_at_a_time(task):
    s = DragSession()
    s.begin('move', task, 0)
    with pytest.raises(DragStateError):
        s.begin('move', task, 0)


def test_summaries_and_bad_dates_are_not_draggable(task):
    s = DragSession()
    assert not s.begin('move', task, 0, summary_ids={'t'})
    assert not s.begin('move', make_task('x', 'bad', '2024-01-01'), 0)
    assert s.state is DragState.IDLE
    assert s.update(500) is None


def test_default_width_comes_from_settings(task):
    s = DragSession()
    assert s.pixels_per_day == 40.0
    with pytest.raises(ValueError):
        DragSession(pixels_per_day=0)


def test_shift_dates_rejects_unknown_mode():
    from datetime import date
    with pytest.raises(ValueError):
        shift_dates('spin', date(2024, 1, 1), date(2024, 1, 2), 1)


def test_drag_near_the_end_of_the_calendar_stops_at_the_edge():
    s = DragSession(pixels_per_day=0.5)
    s.begin('move', make_task('t', '9999-12-20', '9999-12-30'), 0)
    assert s.update(100) == DragPreview('t', '9999-12-21', '9999-12-31', 10)
    s.cancel()
    s.begin('resize-right', make_task('t', '9999-12-20', '9999-12-30'), 0)
    assert s.update(100).end_date == '9999-12-31'
    s.cancel()
    s.begin('resize-left', make_task('t', '0001-01-05', '0001-01-10'), 0)
    assert s.update(-100).start_date == '0001-01-01'
