import pytest

from slotgrid import grid, layout
from slotgrid.errors import InvalidArgument, NotFound
from slotgrid.grid import GridState


def test_default_state_is_empty_three_by_three():
    state = GridState()
    assert state.snapshot() == {"rows": 3, "cols": 3, "blocked": [], "names": {}}


def test_generate_replaces_everything():
    state = GridState(rows=3, cols=3, blocked={"0-0"}, names={1: "A"})
    result = grid.generate(state, 2, 4)
    assert result == GridState(rows=2, cols=4)


def test_generate_accepts_numeric_strings():
    assert grid.generate(GridState(), "5", " 6 ") == GridState(rows=5, cols=6)


@pytest.mark.parametrize(
    "rows,cols",
    [
        (None, 3),
        (3, None),
        (0, 3),
        (3, -1),
        ("abc", 3),
        (3, "2.5"),
        (True, 3),
        (2.5, 3),
        ("\u00b2", 3),
        (3, "9" * 5000),
    ],
)
def test_generate_rejects_invalid_dimensions(rows, cols):
    with pytest.raises(InvalidArgument):
        grid.generate(GridState(), rows, cols)


def test_generate_rejects_oversized_grid(monkeypatch):
    monkeypatch.setattr(layout, "MAX_DIMENSION", 10)
    with pytest.raises(InvalidArgument):
        grid.generate(GridState(), 11, 2)


def test_reset_after_generate_is_a_no_op():
    generated = grid.generate(GridState(), 2, 4)
    assert grid.reset(generated) == generated


def test_reset_keeps_dimensions():
    state = GridState(rows=4, cols=2, blocked={"1-1"}, names={2: "X"})
    assert grid.reset(state) == GridState(rows=4, cols=2)


def test_hide_slot_renumbers_following_slots():
    state = GridState(rows=3, cols=3, names={3: "top", 4: "next"})
    before = state.mapping()

    result = grid.update(state, 3, None, "hide")

    assert result.blocked == {before.coord_of(3)}
    after = result.mapping()
    assert after.visible_count == before.visible_count - 1
    assert after.coord_of(3) == before.coord_of(4)
    assert result.names == {4: "next"}


def test_hide_prunes_labels_past_the_last_slot():
    state = GridState(rows=2, cols=2, names={4: "last"})
    result = grid.update(state, 1, "", "hide")
    assert result.names == {}


def test_hide_does_not_mutate_input():
    state = GridState(rows=2, cols=2, names={1: "A"})
    grid.update(state, 1, None, "hide")
    assert state == GridState(rows=2, cols=2, names={1: "A"})


def test_hide_unknown_number_raises_not_found():
    state = GridState(rows=2, cols=2)
    with pytest.raises(NotFound) as info:
        grid.update(state, 5, None, "hide")
    assert info.value.box_num == 5


def test_hide_all_slots_one_by_one():
    state = GridState(rows=2, cols=2)
    for _ in range(4):
        state = grid.update(state, 1, None, "hide")
    assert state.mapping().visible_count == 0
    assert len(state.blocked) == 4
    with pytest.raises(NotFound):
        grid.update(state, 1, None, "hide")


def test_label_is_trimmed():
    result = grid.update(GridState(), 2, "  Screws  ", "show")
    assert result.names == {2: "Screws"}


@pytest.mark.parametrize("subtitle", ["", "   ", None])
def test_blank_subtitle_removes_label(subtitle):
    state = GridState(names={2: "Screws"})
    assert grid.update(state, 2, subtitle, "show").names == {}


def test_blank_subtitle_without_label_is_not_an_error():
    assert grid.update(GridState(), 7, "", None).names == {}


def test_label_for_missing_number_is_kept():
    result = grid.update(GridState(rows=1, cols=1), 5, "later", "anything")
    assert result.names == {5: "later"}


@pytest.mark.parametrize("box_num", [None, 0, -2, "x", False, "\u00b2"])
def test_update_rejects_invalid_box_number(box_num):
    with pytest.raises(InvalidArgument):
        grid.update(GridState(), box_num, "label", "show")


def test_snapshot_orders_blocked_by_traversal():
    state = GridState(rows=3, cols=2, blocked={"0-1", "2-0", "0-0"})
    assert state.snapshot()["blocked"] == ["2-0", "0-0", "0-1"]


def test_slots_list_labels():
    state = GridState(rows=1, cols=2, names={2: "B"})
    assert state.slots() == [
        {"number": 1, "coord": "0-0", "row": 0, "col": 0, "label": None},
        {"number": 2, "coord": "0-1", "row": 0, "col": 1, "label": "B"},
    ]


def test_prune_drops_out_of_range_entries():
    state = GridState(rows=2, cols=2, blocked={"5-5", "0-0", "junk"}, names={1: "A", 9: "Z"})
    result = grid.prune(state)
    assert result.blocked == {"0-0"}
    assert result.names == {1: "A"}

