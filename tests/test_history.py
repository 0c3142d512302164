import random

from services.session.history import HistoryNavigator
from conftest import make_image_ref


def _navigator_with(count: int) -> HistoryNavigator:
    nav = HistoryNavigator()
    nav.record_new_root(make_image_ref((0, 0, 0)))
    for i in range(1, count):
        nav.select_for_further_editing(make_image_ref((i, i, i)))
    return nav


def test_empty_history_navigation_is_noop():
    nav = HistoryNavigator()
    assert nav.current is None
    assert nav.current_index == -1
    assert not nav.can_undo and not nav.can_redo
    assert nav.undo() is False
    assert nav.redo() is False


def test_record_new_root_replaces_everything():
    nav = _navigator_with(3)
    root = make_image_ref((9, 9, 9))
    nav.record_new_root(root)
    assert len(nav) == 1
    assert nav.current_index == 0
    assert nav.current_image is root
    assert nav.current.origin == "upload"
    assert not nav.is_editing


def test_undo_at_start_and_redo_at_end_are_noops():
    nav = _navigator_with(3)
    assert nav.redo() is False
    assert nav.current_index == 2
    assert nav.undo() and nav.undo()
    assert nav.undo() is False
    assert nav.current_index == 0


def test_flags_follow_position():
    nav = _navigator_with(3)
    assert nav.can_undo and not nav.can_redo and nav.is_editing
    nav.undo()
    assert nav.can_undo and nav.can_redo
    nav.undo()
    assert not nav.can_undo and nav.can_redo and not nav.is_editing


def test_select_for_further_editing_truncates_redo_branch():
    nav = _navigator_with(4)
    nav.undo()
    nav.undo()
    kept = [entry.image for entry in nav.entries[:2]]
    new_image = make_image_ref((1, 2, 3))

    nav.select_for_further_editing(new_image)

    assert len(nav) == 3
    assert [entry.image for entry in nav.entries[:2]] == kept
    assert nav.current_image is new_image
    assert nav.current.origin == "generated"
    assert nav.can_redo is False
    assert nav.redo() is False


def test_random_navigation_stays_in_bounds():
    rng = random.Random(7)
    nav = _navigator_with(5)
    for _ in range(200):
        rng.choice([nav.undo, nav.redo])()
        assert 0 <= nav.current_index <= len(nav) - 1
        assert nav.can_undo == (nav.current_index > 0)
        assert nav.can_redo == (nav.current_index < len(nav) - 1)
