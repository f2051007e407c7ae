import pytest

from gridarray import CoordinateOutOfRange, GridArray, IndexOutOfRange


def test_dimensions_and_length():
    grid = GridArray(5, 4, ".")
    assert grid.width == 5
    assert grid.height == 4
    assert grid.length() == 20
    assert len(grid) == 20


@pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
def test_non_positive_dimensions_rejected(width, height):
    with pytest.raises(ValueError):
        GridArray(width, height, 0)


def test_only_one_dimension_rejected():
    with pytest.raises(ValueError):
        GridArray(3)


def test_set_then_get_every_cell():
    grid = GridArray(4, 3, 0)
    for y in range(3):
        for x in range(4):
            grid.set(x, y, (x, y))
    for y in range(3):
        for x in range(4):
            assert grid.get(x, y) == (x, y)


def test_get_out_of_range_is_resignaled():
    grid = GridArray(3, 3, 0)
    with pytest.raises(CoordinateOutOfRange) as exc:
        grid.get(5, 5)
    assert (exc.value.x, exc.value.y) == (5, 5)
    # Chained to the indexing failure it replaces
    assert isinstance(exc.value.__cause__, IndexOutOfRange)


def test_set_out_of_range_propagates_index_error_unchanged():
    grid = GridArray(3, 3, 0)
    with pytest.raises(IndexOutOfRange):
        grid.set(-1, 0, 7)
    assert list(grid) == [0] * 9


def test_tuple_indexing_is_checked():
    grid = GridArray(3, 3, 0)
    grid[1, 2] = "x"
    assert grid[1, 2] == "x"
    assert grid.get(1, 2) == "x"

    with pytest.raises(CoordinateOutOfRange):
        grid[3, 3]
    with pytest.raises(IndexOutOfRange):
        grid[3, 3] = "y"


def test_flat_indexing_is_unchecked():
    grid = GridArray(3, 2, 0)
    grid[4] = 8
    assert grid[4] == 8
    assert grid.get(1, 1) == 8

    # Falls through to list behaviour
    assert grid[-1] == 0
    with pytest.raises(IndexError) as exc:
        grid[6]
    assert not isinstance(exc.value, CoordinateOutOfRange)


def test_from_rows_and_to_rows():
    rows = [
        [1, 2, 3],
        [4, 5, 6],
    ]
    grid = GridArray.from_rows(rows)
    assert (grid.width, grid.height) == (3, 2)
    assert grid.get(2, 0) == 3
    assert grid.get(0, 1) == 4
    assert grid.to_rows() == rows

    # to_rows returns copies
    grid.to_rows()[0][0] = 99
    assert grid.get(0, 0) == 1


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError):
        GridArray.from_rows([[1, 2], [3]])
    with pytest.raises(ValueError):
        GridArray.from_rows([])


def test_equality_compares_dimensions_and_contents():
    a = GridArray.from_rows([[1, 2], [3, 4]])
    b = GridArray.from_rows([[1, 2], [3, 4]])
    c = GridArray.from_rows([[1, 2, 3, 4]])
    assert a == b
    assert a != c
    b.set(0, 0, 9)
    assert a != b
    assert repr(a) == "GridArray(width=2, height=2)"
