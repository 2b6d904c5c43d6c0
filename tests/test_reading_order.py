"""Tests for row-aware reading order."""

from comicpanels import Panel, ReadingDirection, ReadingOrderSorter, sort_reading_order

LTR = ReadingOrderSorter(ReadingDirection.LEFT_TO_RIGHT)
RTL = ReadingOrderSorter(ReadingDirection.RIGHT_TO_LEFT)

TOP_LEFT = Panel(10, 10, 100, 100)
TOP_RIGHT = Panel(200, 10, 100, 100)
BOTTOM_LEFT = Panel(10, 200, 100, 100)
BOTTOM_RIGHT = Panel(200, 200, 100, 100)
GRID = [BOTTOM_RIGHT, TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT]


def _xy(panels):
    return [(p.x, p.y) for p in panels]


def test_empty_input():
    assert LTR.sort([]) == []


def test_single_panel_gets_order_zero():
    assert LTR.sort([Panel(10, 10, 100, 100, order=7)]) == [Panel(10, 10, 100, 100, order=0)]


def test_horizontal_row_left_to_right():
    panels = [Panel(200, 10, 100, 100), Panel(10, 10, 100, 100), Panel(400, 10, 100, 100)]
    result = LTR.sort(panels)
    assert [p.x for p in result] == [10, 200, 400]
    assert [p.order for p in result] == [0, 1, 2]


def test_horizontal_row_right_to_left():
    panels = [Panel(200, 10, 100, 100), Panel(10, 10, 100, 100), Panel(400, 10, 100, 100)]
    result = RTL.sort(panels)
    assert [p.x for p in result] == [400, 200, 10]
    assert [p.order for p in result] == [0, 1, 2]


def test_vertical_stack_top_to_bottom():
    panels = [Panel(10, 200, 100, 100), Panel(10, 10, 100, 100), Panel(10, 400, 100, 100)]
    result = LTR.sort(panels)
    assert [p.y for p in result] == [10, 200, 400]
    assert [p.order for p in result] == [0, 1, 2]


def test_grid_left_to_right():
    result = LTR.sort(GRID)
    assert _xy(result) == _xy([TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT])
    assert [p.order for p in result] == [0, 1, 2, 3]


def test_grid_right_to_left():
    result = RTL.sort(GRID)
    assert _xy(result) == _xy([TOP_RIGHT, TOP_LEFT, BOTTOM_RIGHT, BOTTOM_LEFT])
    assert [p.order for p in result] == [0, 1, 2, 3]


def test_offset_panels_share_a_row():
    result = LTR.sort([Panel(200, 20, 100, 100), Panel(10, 10, 100, 100)])
    assert [p.x for p in result] == [10, 200]


def test_strict_row_threshold_splits_rows():
    # 70px vertical overlap: enough for 0.5, not for 0.9
    panels = [Panel(10, 10, 100, 100), Panel(200, 40, 100, 100)]
    assert [p.x for p in sort_reading_order(panels, "rtl", 0.5)] == [200, 10]
    assert [p.x for p in sort_reading_order(panels, "rtl", 0.9)] == [10, 200]


def test_rows_are_matched_against_their_first_panel_only():
    a = Panel(100, 0, 100, 100)
    b = Panel(300, 40, 100, 100)    # shares a row with a
    c = Panel(0, 80, 100, 100)      # overlaps b enough, a too little
    result = LTR.sort([c, b, a])
    assert _xy(result) == _xy([a, b, c])


def test_exact_ties_keep_input_order():
    first = Panel(0, 0, 10, 10)
    second = Panel(0, 0, 20, 10)
    assert [p.width for p in LTR.sort([first, second])] == [10, 20]
    assert [p.width for p in RTL.sort([first, second])] == [10, 20]


def test_zero_area_panels_are_sorted():
    result = LTR.sort([Panel(10, 0, 0, 0), Panel(0, 0, 0, 0)])
    assert len(result) == 2
    assert [p.order for p in result] == [0, 1]


def test_input_is_not_mutated():
    panels = list(GRID)
    LTR.sort(panels)
    assert panels == GRID


def test_sorting_is_a_fixed_point():
    for sorter in (LTR, RTL):
        once = sorter.sort(GRID)
        assert sorter.sort(once) == once


def test_direction_accepts_string_value():
    assert ReadingOrderSorter("rtl").direction is ReadingDirection.RIGHT_TO_LEFT
