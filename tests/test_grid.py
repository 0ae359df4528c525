import numpy as np
import pytest
from msascore.containers.grid import DenseGrid, GridError


class TestDenseGrid:
    def test_shape_and_size(self):
        grid = DenseGrid((3, 4, 2))
        assert grid.shape == (3, 4, 2)
        assert grid.ndim == 3
        assert len(grid) == 24
        assert grid.strides == (8, 2, 1)

    def test_get_set(self):
        grid = DenseGrid((3, 4), dtype=np.int64)
        grid[(2, 1)] = -7
        assert grid[(2, 1)] == -7
        assert grid.data[grid.offset((2, 1))] == -7
        assert grid[(1, 2)] == 0

    def test_offsets_match_numpy_c_order(self):
        grid = DenseGrid((2, 3, 4))
        for coordinate in np.ndindex(2, 3, 4):
            assert grid.offset(coordinate) == np.ravel_multi_index(coordinate, (2, 3, 4))
            assert grid.coordinate(grid.offset(coordinate)) == coordinate

    def test_fill_value_and_dtype(self):
        flags = DenseGrid((2, 2), dtype=np.bool_, fill_value=False)
        assert flags.dtype == np.bool_
        assert not flags.data.any()

    def test_like(self):
        scores = DenseGrid((4, 5), dtype=np.int64)
        flags = DenseGrid.like(scores, dtype=np.bool_, fill_value=False)
        assert flags.shape == scores.shape
        assert flags.dtype == np.bool_

    def test_zero_dimensional(self):
        grid = DenseGrid(())
        assert len(grid) == 1
        grid[()] = 5
        assert grid[()] == 5
        assert grid.coordinate(0) == ()

    def test_array_view(self):
        grid = DenseGrid((2, 3))
        grid[(1, 2)] = 9
        assert np.asarray(grid)[1, 2] == 9

    @pytest.mark.parametrize('shape', [(0,), (3, 0), (2, -1)])
    def test_invalid_extents(self, shape):
        with pytest.raises(GridError, match="positive"):
            DenseGrid(shape)

    def test_out_of_range_coordinate_is_an_assertion(self):
        grid = DenseGrid((2, 2))
        with pytest.raises(AssertionError):
            grid[(2, 0)]
        with pytest.raises(AssertionError):
            grid[(-1, 0)]

    def test_wrong_dimensionality_is_an_assertion(self):
        grid = DenseGrid((2, 2))
        with pytest.raises(AssertionError):
            grid.offset((1,))
