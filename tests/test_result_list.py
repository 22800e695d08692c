import pytest

from qpmu.result_list import BoundedUsize, ListStyle, ListStyleKind, ResultList


def test_saturating_set_clamps():
    b = BoundedUsize(bound=3)
    b.saturating_set(10)
    assert b.value == 3
    assert b.is_max()
    assert b.is_at_bounds()


def test_saturating_add_floors_at_zero():
    b = BoundedUsize(2, 5)
    b.saturating_add_signed(-5)
    assert b.value == 0
    assert b.is_min()


def test_wrapping_add_wraps_both_ways():
    b = BoundedUsize(bound=4)
    b.wrapping_add_signed(-1)
    assert b.value == b.bound
    b.wrapping_add_signed(1)
    assert b.value == 0


def test_middle_not_at_bounds():
    assert not BoundedUsize(1, 3).is_at_bounds()


def test_invalid_construction():
    with pytest.raises(ValueError):
        BoundedUsize(4, 3)


@pytest.mark.parametrize("delta", [-100, -7, -1, 0, 1, 3, 8, 1000])
def test_value_stays_in_bounds(delta):
    for start in range(6):
        w = BoundedUsize(start, 5)
        w.wrapping_add_signed(delta)
        s = BoundedUsize(start, 5)
        s.saturating_add_signed(delta)
        assert 0 <= w.value <= 5
        assert 0 <= s.value <= 5


def test_result_list_wraps_from_ends_and_saturates_inside():
    items = ["a", "b", "c"]
    rl = ResultList(items)
    assert rl.selection == 0
    rl.move_selection_signed(-1)
    assert rl.selected_item() == "c"
    rl.move_selection_signed(-1)
    assert rl.selected_item() == "b"
    rl.move_selection_signed(5)
    assert rl.selected_item() == "c"
    rl.move_selection_signed(1)
    assert rl.selected_item() == "a"


def test_set_selection_clamps_to_last():
    rl = ResultList(["a", "b"])
    rl.set_selection(99)
    assert rl.selection == len(rl) - 1


def test_empty_list():
    rl = ResultList()
    assert len(rl) == 0
    assert rl.selected_item() is None
    rl.move_selection_signed(3)
    assert rl.selection == 0
    assert rl.style is None


def test_items_preserved():
    rl = ResultList(["x", "y"], ListStyle(ListStyleKind.GRID))
    assert list(rl.items) == ["x", "y"]
    assert rl.style == ListStyle(ListStyleKind.GRID)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"rows": None}, ListStyle(ListStyleKind.ROWS)),
        ({"grid": None}, ListStyle(ListStyleKind.GRID)),
        ({"grid_with_columns": 3}, ListStyle(ListStyleKind.GRID_WITH_COLUMNS, 3)),
    ],
)
def test_list_style_from_dict(data, expected):
    assert ListStyle.from_dict(data) == expected


def test_list_style_unknown():
    with pytest.raises(ValueError):
        ListStyle.from_dict({"columns": 2})