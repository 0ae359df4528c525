"""
Exact sum-of-pairs scoring of k sequences by dynamic programming over the k-dimensional prefix lattice.

Each lattice node is a ``Coordinate`` of prefix lengths. The best score of a node is the best, over every
non-empty column mask, of the predecessor's score plus the score of the column that mask implies.
"""
from dataclasses import dataclass, replace
from enum import IntEnum
from math import prod
from typing import Union, Iterable, Optional
from warnings import warn

import numpy as np

from msascore import MsaScoreWarning
from msascore.core.alphabet import Alphabet
from msascore.core.symbols import Symbol
from msascore.containers.seq import Seq
from msascore.containers.grid import DenseGrid, Coordinate
from msascore.engines.masks import column_masks
from msascore.engines.scoring import SUM_OF_PAIRS, SCALE, column_score, _column_score_kernel
from msascore.lib.resources import jit


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class LatticeSizeError(ValueError):
    """Raised when the dense lattice would exceed the configured cell limit."""


class LatticeSizeWarning(MsaScoreWarning):
    """Emitted when the dense lattice is large enough to be slow or memory hungry."""


# Constants ------------------------------------------------------------------------------------------------------------
class Strategy(IntEnum):
    """Evaluation order of the recurrence; every strategy yields the same score."""
    MEMO = 0
    TABULATE = 1


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class SolverPolicy:
    """
    Defines HOW the lattice is evaluated.
    Frozen = Immutable and Hashable.

    Attributes:
        strategy: ``MEMO`` visits only the nodes reachable from the terminal coordinate, top-down;
            ``TABULATE`` fills every node bottom-up in a compiled kernel when numba is available.
        warn_cells: Emit a ``LatticeSizeWarning`` above this many lattice cells (``None`` disables).
        max_cells: Raise ``LatticeSizeError`` above this many lattice cells (``None`` disables).
    """
    strategy: Union[Strategy, str, int] = Strategy.MEMO
    warn_cells: Optional[int] = 10_000_000
    max_cells: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.strategy, Strategy): return
        if isinstance(self.strategy, str):
            try:
                val = Strategy[self.strategy.upper()]
            except KeyError:
                raise ValueError(f"Invalid strategy name: {self.strategy}")
        else:
            try:
                val = Strategy(self.strategy)
            except ValueError:
                raise ValueError(f"Invalid strategy value: {self.strategy}")
        object.__setattr__(self, 'strategy', val)

    def check(self, cells: int):
        """Applies the size limits to a lattice of ``cells`` cells."""
        if self.max_cells is not None and cells > self.max_cells:
            raise LatticeSizeError(f"Lattice of {cells} cells exceeds the limit of {self.max_cells}")
        if self.warn_cells is not None and cells > self.warn_cells:
            warn(f"Allocating a dense lattice of {cells} cells", LatticeSizeWarning)


class AlignmentContext:
    """
    Owns the working state of one scoring request: the sequences, the column masks, the score grid and
    the computed-flag grid. Create one per request and discard it afterwards.

    Args:
        seqs: The sequences, as ``Seq`` objects or literal strings / bytes (mapped with ``Alphabet.DNA``).
        policy: Evaluation policy; defaults to ``SolverPolicy()``.

    Examples:
        >>> AlignmentContext(['AC', 'AC']).solve()
        6.0
    """
    __slots__ = ('_seqs', '_policy', '_masks', '_mask_rows', '_scores', '_computed')
    def __init__(self, seqs: Iterable[Union[Seq, str, bytes]], policy: SolverPolicy = None):
        self._seqs: list[Seq] = [Alphabet.DNA.seq_from(s) for s in seqs]
        self._policy = policy or SolverPolicy()
        shape = tuple(len(s) + 1 for s in self._seqs)
        self._policy.check(prod(shape))
        self._masks = column_masks(len(self._seqs))
        self._mask_rows: list[tuple[int, ...]] = [tuple(int(b) for b in row) for row in self._masks]
        self._scores = DenseGrid(shape, dtype=np.int64)
        self._computed = DenseGrid.like(self._scores, dtype=np.bool_, fill_value=False)
        assert self._scores.shape == self._computed.shape, 'Score and flag grids must share a shape'

    def __len__(self): return len(self._seqs)
    def __repr__(self): return f"AlignmentContext(k={len(self._seqs)}, shape={self._scores.shape})"

    @property
    def seqs(self) -> list[Seq]: return self._seqs
    @property
    def policy(self) -> SolverPolicy: return self._policy
    @property
    def masks(self) -> np.ndarray: return self._masks
    @property
    def scores(self) -> DenseGrid: return self._scores
    @property
    def computed(self) -> DenseGrid: return self._computed

    @property
    def terminal(self) -> Coordinate:
        """The coordinate at which every sequence is fully aligned."""
        return tuple(len(s) for s in self._seqs)

    def solve(self) -> float:
        """Returns the optimal sum-of-pairs score of the whole alignment in true (undoubled) units."""
        return self.optimal_score(self.terminal) / SCALE

    def optimal_score(self, coordinate: Coordinate) -> int:
        """
        Returns the best doubled score for aligning the prefixes named by ``coordinate``.

        Any zero component short-circuits to 0, even while other prefixes are non-empty.
        """
        coordinate = tuple(int(c) for c in coordinate)
        assert all(c >= 0 for c in coordinate), f'Negative coordinate {coordinate}'
        if self._is_base(coordinate): return 0
        if not self._computed[coordinate]:
            if self._policy.strategy == Strategy.TABULATE: self._tabulate()
            else: self._memoize(coordinate)
        return int(self._scores[coordinate])

    @staticmethod
    def _is_base(coordinate: Coordinate) -> bool:
        return any(c <= 0 for c in coordinate)

    def _predecessors(self, coordinate: Coordinate):
        """Yields ``(mask, predecessor)`` for every mask whose predecessor stays inside the lattice."""
        for mask in self._mask_rows:
            pred = tuple(c - b for c, b in zip(coordinate, mask))
            if any(c < 0 for c in pred): continue
            yield mask, pred

    def _column(self, coordinate: Coordinate, mask: tuple[int, ...]) -> list[Symbol]:
        return [seq.at(c) if bit else Symbol.GAP for seq, c, bit in zip(self._seqs, coordinate, mask)]

    def _memoize(self, target: Coordinate):
        """Top-down memoized evaluation driven by an explicit stack rather than Python recursion."""
        scores, computed = self._scores, self._computed
        stack = [(target, self._predecessors(target))]
        while stack:
            coordinate, preds = stack[-1]
            # Descend into the next unfinished predecessor; resumes where it left off on return
            for _, p in preds:
                if not self._is_base(p) and not computed[p]:
                    stack.append((p, self._predecessors(p)))
                    break
            else:
                stack.pop()
                scores[coordinate] = self._best(coordinate)
                computed[coordinate] = True

    def _best(self, coordinate: Coordinate) -> int:
        """Best candidate over every mask; every non-base predecessor must already be computed."""
        scores = self._scores
        return max(
            ((0 if self._is_base(p) else int(scores[p])) + column_score(self._column(coordinate, mask))
             for mask, p in self._predecessors(coordinate)),
            default=0
        )

    def _tabulate(self):
        """Bottom-up evaluation of every lattice node in linear (C) order."""
        k = len(self._seqs)
        symbols = np.full((k, max((len(s) for s in self._seqs), default=0)), Symbol.GAP, dtype=np.uint8)
        for i, seq in enumerate(self._seqs): symbols[i, :len(seq)] = seq.encoded
        _tabulate_kernel(
            symbols, np.array(self._scores.strides, dtype=np.int64), self._masks,
            SUM_OF_PAIRS.data, np.int64(Symbol.GAP), self._scores.data, self._computed.data
        )


# Functions ------------------------------------------------------------------------------------------------------------
def solve(sequences: Iterable[Union[Seq, str, bytes]], strategy: Union[Strategy, str] = None,
          policy: SolverPolicy = None) -> float:
    """
    Computes the optimal sum-of-pairs alignment score of the given sequences.

    Characters other than ``A``, ``C``, ``G`` and ``T`` (lowercase included) are read as gaps.
    Scores use match +3, mismatch -2, gap -1.5 and gap-vs-gap 0 per pair of sequences in a column.

    Args:
        sequences: Literal strings, bytes or ``Seq`` objects.
        strategy: Overrides the policy's evaluation strategy (``'memo'`` or ``'tabulate'``).
        policy: Evaluation policy; defaults to ``SolverPolicy()``.

    Returns:
        The optimal score as a float.

    Examples:
        >>> solve(['AG', 'AC'])
        1.0
        >>> solve(['AAA', 'AAA', 'AAA'], strategy='tabulate')
        27.0
    """
    policy = policy or SolverPolicy()
    if strategy is not None: policy = replace(policy, strategy=strategy)
    return AlignmentContext(sequences, policy).solve()


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _tabulate_kernel(symbols, strides, masks, table, gap, scores, computed):
    """
    Fills the flat score buffer in increasing offset order. Every predecessor ``C - m`` of a node has a
    strictly smaller offset, so it is final before the node is visited.
    """
    k = strides.shape[0]
    n_masks = masks.shape[0]
    coord = np.empty(k, dtype=np.int64)
    column = np.empty(k, dtype=np.int64)
    for offset in range(scores.shape[0]):
        rem = offset
        base = False
        for i in range(k):
            coord[i] = rem // strides[i]
            rem -= coord[i] * strides[i]
            if coord[i] == 0: base = True
        if base:
            scores[offset] = 0
            computed[offset] = True
            continue

        best = 0
        found = False
        for m in range(n_masks):
            pred = offset
            valid = True
            for i in range(k):
                if masks[m, i] == 1:
                    if coord[i] < 1:
                        valid = False
                        break
                    pred -= strides[i]
                    column[i] = symbols[i, coord[i] - 1]
                else:
                    column[i] = gap
            if not valid: continue
            candidate = scores[pred] + _column_score_kernel(column, table)
            if not found or candidate > best:
                best = candidate
                found = True
        scores[offset] = best
        computed[offset] = True
