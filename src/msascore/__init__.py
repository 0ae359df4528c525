"""
Top-level module: exact sum-of-pairs scoring of multiple DNA sequences.

Examples:
    >>> from msascore import solve
    >>> solve(['AC', 'AC'])
    6.0
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class MsaScoreWarning(Warning): pass


# Public API -----------------------------------------------------------------------------------------------------------
from msascore.core.symbols import Symbol  # noqa: E402
from msascore.core.alphabet import Alphabet, AlphabetError  # noqa: E402
from msascore.containers.seq import Seq  # noqa: E402
from msascore.containers.grid import DenseGrid, Coordinate, GridError  # noqa: E402
from msascore.engines.masks import column_masks, mask_count  # noqa: E402
from msascore.engines.scoring import ScoreMatrix, pair_score, column_score  # noqa: E402
from msascore.engines.msa import (  # noqa: E402
    AlignmentContext, SolverPolicy, Strategy, LatticeSizeError, LatticeSizeWarning, solve
)

__all__ = [
    'MsaScoreWarning', 'Symbol', 'Alphabet', 'AlphabetError', 'Seq', 'DenseGrid', 'Coordinate', 'GridError',
    'column_masks', 'mask_count', 'ScoreMatrix', 'pair_score', 'column_score', 'AlignmentContext',
    'SolverPolicy', 'Strategy', 'LatticeSizeError', 'LatticeSizeWarning', 'solve'
]
