"""
Dense multi-dimensional grid addressed by integer coordinates.

The grid stores its cells in one flat, C-ordered numpy buffer and maps each
``Coordinate`` to a linear offset through precomputed strides. The flat buffer
is exposed so that kernels can walk the lattice without per-cell Python calls.
"""
from typing import Iterable, Union

import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class GridError(Exception):
    """Raised when a grid cannot be allocated from the given extents."""


# Types ----------------------------------------------------------------------------------------------------------------
Coordinate = tuple[int, ...]
"""One non-negative integer per dimension, e.g. one prefix length per sequence."""


# Classes --------------------------------------------------------------------------------------------------------------
class DenseGrid:
    """
    A dense, eagerly allocated grid of fixed shape.

    Args:
        shape: Per-dimension extents. An empty shape allocates a single cell.
        dtype: Numpy dtype of the cells.
        fill_value: Initial value of every cell.

    Raises:
        GridError: If any extent is not a positive integer.

    Examples:
        >>> grid = DenseGrid((3, 4), dtype=np.int64)
        >>> grid[(2, 1)] = 7
        >>> grid.offset((2, 1))
        9
        >>> grid[(2, 1)]
        7
    """
    __slots__ = ('_data', '_shape', '_strides')
    def __init__(self, shape: Iterable[int], dtype: Union[type, np.dtype] = np.int64, fill_value=0):
        shape = tuple(int(i) for i in shape)
        if any(i < 1 for i in shape): raise GridError(f'Grid extents must be positive, got {shape}')
        self._shape: tuple[int, ...] = shape
        self._strides: tuple[int, ...] = self._c_strides(shape)
        self._data = np.full(int(np.prod(shape, dtype=np.int64)), fill_value, dtype=dtype)

    @classmethod
    def like(cls, other: 'DenseGrid', dtype: Union[type, np.dtype] = None, fill_value=0) -> 'DenseGrid':
        """Allocates a new grid with the same shape as ``other``."""
        return cls(other.shape, dtype=other.dtype if dtype is None else dtype, fill_value=fill_value)

    @staticmethod
    def _c_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
        strides = [1] * len(shape)
        for i in range(len(shape) - 2, -1, -1):
            strides[i] = strides[i + 1] * shape[i + 1]
        return tuple(strides)

    def __len__(self): return self._data.shape[0]
    def __repr__(self): return f"DenseGrid{self._shape}"
    def __array__(self, dtype=None, copy=None):
        return self._data.reshape(self._shape).astype(dtype, copy=False) if dtype else self._data.reshape(self._shape)

    def __getitem__(self, coordinate: Coordinate):
        return self._data[self.offset(coordinate)]

    def __setitem__(self, coordinate: Coordinate, value):
        self._data[self.offset(coordinate)] = value

    @property
    def shape(self) -> tuple[int, ...]:
        """Per-dimension extents."""
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        """Element (not byte) strides of each dimension in the flat buffer."""
        return self._strides

    @property
    def ndim(self) -> int: return len(self._shape)
    @property
    def dtype(self) -> np.dtype: return self._data.dtype

    @property
    def data(self) -> np.ndarray:
        """The flat, C-ordered cell buffer (mutable, zero-copy)."""
        return self._data

    def offset(self, coordinate: Coordinate) -> int:
        """Maps a coordinate to its linear offset in the flat buffer.

        Out-of-range coordinates are programming errors and fail the assertions.
        """
        assert len(coordinate) == len(self._shape), f'Expected {len(self._shape)}-D coordinate, got {coordinate}'
        offset = 0
        for c, extent, stride in zip(coordinate, self._shape, self._strides):
            assert 0 <= c < extent, f'Coordinate {coordinate} outside grid {self._shape}'
            offset += c * stride
        return offset

    def coordinate(self, offset: int) -> Coordinate:
        """Inverse of ``offset``."""
        assert 0 <= offset < len(self), f'Offset {offset} outside grid of {len(self)} cells'
        return tuple(int(i) for i in np.unravel_index(offset, self._shape)) if self._shape else ()

