"""
Module for representing ASCII alphabets and mapping literal characters to symbols.
"""
from typing import Union, Final, ClassVar

import numpy as np

from msascore.containers.seq import Seq
from msascore.core.symbols import Symbol
from msascore.lib.resources import RESOURCES


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlphabetError(Exception):
    """Raised when an alphabet is invalid or an operation is incompatible with the alphabet."""


# Classes --------------------------------------------------------------------------------------------------------------
class Alphabet:
    """
    A class to represent an alphabet of ASCII symbols.

    Every byte maps to a symbol index: bytes outside the alphabet map to the
    ``fallback`` symbol, so encoding never rejects or drops input.
    """
    __slots__ = ('_data', '_lookup_table', '_decode_table', '_fallback')
    DTYPE: Final = np.uint8
    MAX_LEN: Final = np.iinfo(DTYPE).max + 1
    ENCODING: Final = 'ascii'

    DNA: ClassVar['Alphabet']

    def __init__(self, symbols: bytes, fallback: bytes, fold_case: bool = False):
        """
        Initializes an Alphabet.

        Args:
            symbols: The symbols in the alphabet as bytes.
            fallback: The symbol that every unrecognised byte maps to. Must be in ``symbols``.
            fold_case: If ``True``, lowercase bytes map to their uppercase symbol instead of the fallback.

        Raises:
            AlphabetError: If symbols are not ASCII, too long, contain duplicates, or if the fallback is invalid.
        """
        if not symbols.isascii(): raise AlphabetError('Alphabet symbols must be a valid ASCII string')
        if len(symbols) >= self.MAX_LEN:
            raise AlphabetError(f'Alphabet size must be below {self.MAX_LEN} symbols ({self.DTYPE})')
        if len(set(symbols)) != len(symbols): raise AlphabetError('Alphabet contains duplicate symbols')
        if len(fallback) != 1: raise AlphabetError('Fallback must be a single byte')
        if fallback not in symbols: raise AlphabetError(f'Fallback {fallback} not in alphabet')

        self._data: np.ndarray = np.frombuffer(symbols, dtype=self.DTYPE)
        self._fallback = symbols.index(fallback)

        # Build Lookup Table (every byte resolves to a valid index)
        self._lookup_table = np.full(self.MAX_LEN, self._fallback, dtype=self.DTYPE)
        indices = np.arange(len(symbols), dtype=self.DTYPE)
        if fold_case: self._lookup_table[np.frombuffer(symbols.lower(), dtype=self.DTYPE)] = indices
        self._lookup_table[self._data] = indices
        self._lookup_table.flags.writeable = False

        # Build Decode Table (for fast tobytes)
        decode_map = np.full(self.MAX_LEN, fallback[0], dtype=self.DTYPE)
        decode_map[:len(self._data)] = self._data
        self._decode_table = decode_map.tobytes()

    def __len__(self):
        return len(self._data)

    def __contains__(self, item):
        # Canonical membership only, the fallback mapping does not count
        if isinstance(item, (int, np.integer)): return 0 <= item < self.MAX_LEN and item in self._data
        if isinstance(item, (str, bytes)):
            if len(item) != 1: return False
            val = ord(item) if isinstance(item, str) else item[0]
            return val in self._data
        return False

    def __iter__(self):
        return iter(self._data)

    def __getitem__(self, item):
        return self._data[item]

    def __array__(self, dtype=None, copy=None):
        return self._data.astype(dtype, copy=False) if dtype else self._data

    def __repr__(self):
        return f"Alphabet({self._data.tobytes()!r})"

    def __eq__(self, other):
        if self is other: return True
        if not isinstance(other, Alphabet): return False
        return np.array_equal(self._lookup_table, other._lookup_table) and np.array_equal(self._data, other._data)

    def __hash__(self):
        return hash((self._data.tobytes(), self._lookup_table.tobytes()))

    @property
    def fallback(self) -> int:
        """Returns the index that unrecognised bytes are mapped to."""
        return self._fallback

    def encode(self, text: bytes) -> np.ndarray:
        """
        Encoding from Byte String to Array, one index per input byte.

        Args:
            text: The text to encode as bytes.

        Returns:
            A numpy array of encoded indices.
        """
        return self._lookup_table[np.frombuffer(text, dtype=self.DTYPE)]

    def decode(self, encoded: np.ndarray) -> bytes:
        """Decodes an array of indices back to bytes.

        Args:
            encoded: The numpy array of indices (uint8).

        Returns:
            The decoded bytes string.
        """
        if encoded.dtype != self.DTYPE:
            encoded = encoded.astype(self.DTYPE, copy=False)
        return encoded.tobytes().translate(self._decode_table)

    def new_seq(self, data: np.ndarray) -> 'Seq':
        """
        Factory method. The ONLY valid way to create a Seq.
        """
        return Seq(data, self, _validation_token=self)

    def seq_from(self, data: Union['Seq', str, bytes, np.ndarray]) -> 'Seq':
        """Creates a Seq object from various input types, ensuring correct encoding.

        Characters outside the alphabet (including non-ASCII characters in a ``str``)
        are mapped to the fallback symbol, one symbol per character.

        Args:
            data: The input data. Can be a ``Seq``, string, bytes, or numpy array of encoded indices.

        Returns:
            A new ``Seq`` object with this alphabet.

        Raises:
            AlphabetError: If a ``Seq`` has a different alphabet, or an array is not integer typed or holds
                indices outside ``[0, len(self))``.
            TypeError: If the input type is not supported.

        Examples:
            >>> Alphabet.DNA.seq_from('ACGN')
            ACG-
        """
        if isinstance(data, Seq):
            if data.alphabet != self: raise AlphabetError(f'Sequence has a different alphabet "{data.alphabet}"')
            return data
        if isinstance(data, np.ndarray):
            if not np.issubdtype(data.dtype, np.integer):
                raise AlphabetError(f"Encoded indices must be integers, got {data.dtype}")
            if data.size and (data.min() < 0 or data.max() >= len(self)):
                raise AlphabetError("Encoded indices out of alphabet range")
            return self.new_seq(data.astype(self.DTYPE))
        if isinstance(data, str): data = data.encode(self.ENCODING, errors='replace')
        if isinstance(data, (bytes, bytearray, memoryview)): return self.new_seq(self.encode(bytes(data)))
        raise TypeError(f'Cannot create a sequence from {type(data).__name__}')

    def empty_seq(self) -> 'Seq':
        """Returns an empty sequence with this alphabet.

        Returns:
            An empty ``Seq``.
        """
        return self.new_seq(np.empty(0, dtype=self.DTYPE))

    def random_seq(self, rng: np.random.Generator = None, length: int = None, min_len: int = 5, max_len: int = 50,
                   weights=None, canonical: bool = True) -> 'Seq':
        """
        Generates a random sequence from this alphabet and coerces it to a Seq object.

        Args:
            rng: Random number generator (optional).
            length: Exact length of sequence to generate.
            min_len: Minimum length if length is not specified.
            max_len: Maximum length if length is not specified.
            weights: Weights for each drawable symbol (optional): ``len(self) - 1`` entries when ``canonical``
                (the fallback is excluded), otherwise ``len(self)``.
            canonical: If ``True``, the fallback symbol is never drawn.

        Returns:
            A random Seq object.

        Raises:
            ValueError: If ``weights`` does not have one entry per drawable symbol.

        Examples:
            >>> s = Alphabet.DNA.random_seq(length=10)
            >>> len(s)
            10
        """
        if rng is None: rng = RESOURCES.rng
        if length is None: length = int(rng.integers(min_len, max_len))
        choices = np.array([i for i in range(len(self)) if not (canonical and i == self._fallback)], dtype=self.DTYPE)
        if weights is None:
            indices = rng.choice(choices, size=length)
        else:
            if len(weights) != len(choices):
                raise ValueError(f"Expected {len(choices)} weights, one per drawable symbol, got {len(weights)}")
            indices = rng.choice(choices, size=length, p=weights)
        return self.seq_from(indices.astype(self.DTYPE))


# Initialize Standard Alphabets
Alphabet.DNA = Alphabet(b'ACGT-', fallback=b'-')
