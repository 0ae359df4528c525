"""
Sum-of-pairs column scoring with a fixed nucleotide scheme.

Scores are kept as doubled integers so every intermediate sum is exact; divide
a final total by ``SCALE`` to restore true units (match +3, mismatch -2, gap -1.5).
"""
from itertools import combinations
from typing import Final, Iterable, Union

import numpy as np

from msascore.core.symbols import Symbol
from msascore.lib.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
MATCH: Final = 6
MISMATCH: Final = -4
GAP: Final = -3
GAP_GAP: Final = 0
SCALE: Final = 2.0


# Classes --------------------------------------------------------------------------------------------------------------
class ScoreMatrix:
    """
    Represents the pairwise substitution table indexed by ``Symbol``.

    Attributes:
        _data (np.ndarray): The raw, read-only matrix data.

    Examples:
        >>> m = ScoreMatrix.sum_of_pairs()
        >>> m[Symbol.A, Symbol.GAP]
        -3
    """
    _DTYPE = np.int64
    __slots__ = ('_data',)

    def __init__(self, data: Union[np.ndarray, Iterable]):
        self._data = np.ascontiguousarray(data, dtype=self._DTYPE)
        self._data.flags.writeable = False

    def __getitem__(self, item): return self._data[item]
    def __array__(self, dtype=None, copy=None): return self._data.astype(dtype, copy=False) if dtype else self._data
    def __repr__(self): return f"ScoreMatrix{self._data.shape}"
    @property
    def shape(self): return self._data.shape
    @property
    def data(self) -> np.ndarray:
        """The read-only table, for passing to kernels."""
        return self._data

    @classmethod
    def sum_of_pairs(cls) -> 'ScoreMatrix':
        """Builds the fixed (doubled) match / mismatch / gap table over A, C, G, T and Gap."""
        n = len(Symbol)
        m = np.full((n, n), MISMATCH, dtype=cls._DTYPE)
        np.fill_diagonal(m, MATCH)
        m[Symbol.GAP, :] = GAP
        m[:, Symbol.GAP] = GAP
        m[Symbol.GAP, Symbol.GAP] = GAP_GAP
        return cls(m)


# Functions ------------------------------------------------------------------------------------------------------------
def pair_score(a: int, b: int) -> int:
    """Doubled score of one pair of symbols; symmetric in ``a`` and ``b``."""
    return int(SUM_OF_PAIRS[a, b])


def column_score(symbols: Iterable[int]) -> int:
    """
    Sum-of-pairs score of one alignment column.

    Args:
        symbols: One symbol (or ``Symbol.GAP``) per sequence.

    Returns:
        The doubled sum of ``pair_score`` over every unordered pair of positions.

    Examples:
        >>> column_score([Symbol.A, Symbol.A, Symbol.GAP])
        0
    """
    return sum(pair_score(a, b) for a, b in combinations(symbols, 2))


@jit(nopython=True, cache=True, nogil=True, inline='always')
def _column_score_kernel(column, table):
    """Sum-of-pairs over a 1-D array of encoded symbols."""
    total = 0
    n = column.shape[0]
    for i in range(n - 1):
        a = column[i]
        for j in range(i + 1, n):
            total += table[a, column[j]]
    return total


SUM_OF_PAIRS: Final = ScoreMatrix.sum_of_pairs()
