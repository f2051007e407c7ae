from gridarray import GridArray


def test_fresh_grid_iterates_default_values():
    grid = GridArray(4, 3, 7)
    values = list(grid)
    assert len(values) == 12
    assert all(v == 7 for v in values)


def test_iteration_is_row_major():
    grid = GridArray(3, 2, 0)
    for y in range(2):
        for x in range(3):
            grid.set(x, y, f"{x},{y}")
    assert list(grid) == ["0,0", "1,0", "2,0", "0,1", "1,1", "2,1"]


def test_iteration_is_restartable():
    grid = GridArray.from_rows([[1, 2], [3, 4]])
    assert list(grid) == [1, 2, 3, 4]
    assert list(grid) == [1, 2, 3, 4]
    assert sum(grid) == 10


def test_unallocated_grid_iterates_empty():
    grid = GridArray()
    assert list(grid) == []
    assert len(grid) == 0
    assert grid.to_rows() == []
