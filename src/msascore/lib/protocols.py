from typing import Protocol, runtime_checkable


@runtime_checkable
class HasAlphabet(Protocol):
    """Protocol for objects that possess an Alphabet."""
    @property
    def alphabet(self) -> 'Alphabet': ...
