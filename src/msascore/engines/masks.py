"""
Column masks: which sequences contribute a symbol (bit set) or a gap (bit clear) to one alignment column.
"""
import numpy as np


# Functions ------------------------------------------------------------------------------------------------------------
def mask_count(k: int) -> int:
    """Number of non-empty column masks for ``k`` sequences (``2**k - 1``)."""
    if k < 0: raise ValueError(f'Number of sequences must be non-negative, got {k}')
    return (1 << k) - 1


def column_masks(k: int) -> np.ndarray:
    """
    Enumerates every non-zero ``k``-bit column mask exactly once.

    Integers ``1 .. 2**k - 1`` are decoded so that bit ``i`` of the integer becomes column ``i``
    of the row. The all-gap mask (zero) is never produced.

    Args:
        k: Number of sequences.

    Returns:
        A read-only ``uint8`` array of shape ``(2**k - 1, k)``.

    Raises:
        ValueError: If ``k`` is negative.

    Examples:
        >>> column_masks(2)
        array([[1, 0],
               [0, 1],
               [1, 1]], dtype=uint8)
    """
    n = mask_count(k)
    values = np.arange(1, n + 1, dtype=np.int64)
    masks = ((values[:, None] >> np.arange(k, dtype=np.int64)) & 1).astype(np.uint8)
    masks.flags.writeable = False
    return masks
