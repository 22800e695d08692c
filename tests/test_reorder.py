import pytest

from qpmu.reorder import move_item


def test_move_first_to_end():
    assert move_item(["a", "b", "c"], 0, 2) == (["b", "c", "a"], 2)


def test_move_last_to_start():
    assert move_item(["a", "b", "c"], 2, -2) == (["c", "a", "b"], 0)


def test_large_delta_clamps_to_end():
    assert move_item(["a", "b", "c"], 0, 10) == (["b", "c", "a"], 2)


def test_negative_delta_clamps_to_start():
    assert move_item(["a", "b", "c"], 1, -5) == (["b", "a", "c"], 0)


def test_zero_delta_keeps_order():
    assert move_item(["a", "b", "c"], 1, 0) == (["a", "b", "c"], 1)


def test_input_is_not_modified():
    items = ["a", "b", "c"]
    move_item(items, 0, 1)
    assert items == ["a", "b", "c"]


@pytest.mark.parametrize("index", [0, 1, 2, 3])
@pytest.mark.parametrize("delta", [-4, -1, 1, 4])
def test_moved_item_lands_at_new_index(index, delta):
    items = ["a", "b", "c", "d"]
    reordered, new_index = move_item(items, index, delta)
    assert reordered[new_index] == items[index]
    assert sorted(reordered) == items
    assert 0 <= new_index < len(items)


@pytest.mark.parametrize("index", [3, -1])
def test_out_of_range_index_raises(index):
    with pytest.raises(IndexError):
        move_item(["a", "b", "c"], index, 1)


def test_empty_list_raises():
    with pytest.raises(IndexError):
        move_item([], 0, 1)