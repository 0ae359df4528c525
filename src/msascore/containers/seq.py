"""Immutable, alphabet-aware sequence container."""
from typing import Union

import numpy as np

from msascore.core.symbols import Symbol
from msascore.lib.protocols import HasAlphabet


# Classes --------------------------------------------------------------------------------------------------------------
class Seq(HasAlphabet):
    """
    Immutable, alphabet-aware sequence container storing encoded integers (uint8).

    ``Seq`` objects should be created via ``Alphabet.seq_from()`` or ``Alphabet.random_seq()``
    rather than directly, to ensure encoding consistency.

    Args:
        data: A numpy uint8 array of encoded symbol indices.
        alphabet: The ``Alphabet`` that owns this sequence.
        _validation_token: Internal token (must be the alphabet) to prevent
            direct construction.

    Examples:
        >>> seq = Alphabet.DNA.seq_from('ACGT')
        >>> len(seq)
        4
        >>> seq.at(1)
        <Symbol.A: 0>
    """
    __slots__ = ('_data', '_alphabet', '_hash')
    def __init__(self, data: np.ndarray, alphabet: 'Alphabet', _validation_token: object = None):
        if _validation_token is not alphabet:
            raise PermissionError("Seq objects must be created via an Alphabet")
        self._alphabet = alphabet
        self._data = data
        self._hash = None
        self._data.flags.writeable = False  # Enforce immutability for hashing safety

    @property
    def alphabet(self) -> 'Alphabet':
        """Returns the alphabet used for encoding/decoding.

        Returns:
            The owning ``Alphabet``.
        """
        return self._alphabet

    @property
    def encoded(self) -> np.ndarray:
        """Returns the underlying encoded integer array (zero-copy).

        Returns:
            A read-only ``uint8`` numpy array.
        """
        return self._data

    def __array__(self, dtype=None, copy=None):
        return self._data.astype(dtype, copy=False) if dtype else self._data

    def __bytes__(self) -> bytes: return self._alphabet.decode(self._data)
    def __len__(self): return self._data.shape[0]
    def __str__(self): return self.__bytes__().decode('ascii')
    def __iter__(self): return map(Symbol, self._data)
    def __bool__(self): return len(self._data) > 0
    def __repr__(self):
        if len(self) <= 14: return str(self)
        head = self._alphabet.decode(self._data[:7]).decode('ascii')
        tail = self._alphabet.decode(self._data[-7:]).decode('ascii')
        return f"{head}...{tail}"

    def __eq__(self, other):
        if self is other: return True
        if not isinstance(other, Seq): return False
        if self._alphabet != other._alphabet: return False
        if self._hash is not None and other._hash is not None and self._hash != other._hash: return False
        return np.array_equal(self._data, other._data)

    def __hash__(self):
        if self._hash is None: self._hash = hash(self._data.tobytes())
        return self._hash

    def __add__(self, other: 'Seq') -> 'Seq':
        if self._alphabet != other._alphabet:
            raise ValueError("Cannot concatenate sequences with different alphabets")
        return self._alphabet.seq_from(np.concatenate((self._data, other._data), axis=0))

    def __getitem__(self, item: Union[slice, int]) -> Union['Seq', 'Symbol']:
        """Storage access by 0-based index or slice.

        Args:
            item: An integer index or a Python slice.

        Returns:
            The ``Symbol`` at the index, or a new ``Seq`` for a slice.
        """
        if isinstance(item, slice): return self._alphabet.seq_from(self._data[item])
        return Symbol(self._data[item])

    def at(self, position: int) -> 'Symbol':
        """Returns the symbol at a 1-based logical position.

        Args:
            position: Position in ``[1, len(self)]``.

        Returns:
            The ``Symbol`` at that position.

        Raises:
            IndexError: If the position is outside the sequence.

        Examples:
            >>> Alphabet.DNA.seq_from('ACGT').at(4)
            <Symbol.T: 3>
        """
        if not 1 <= position <= len(self):
            raise IndexError(f'Position {position} outside sequence of length {len(self)}')
        return Symbol(self._data[position - 1])
