"""Encoded symbol constants shared by alphabets, sequences and scorers."""
from enum import IntEnum


class Symbol(IntEnum):
    """Encoded nucleotide symbols. ``GAP`` is a first-class symbol, not a missing value."""
    A = 0
    C = 1
    G = 2
    T = 3
    GAP = 4
