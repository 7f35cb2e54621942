"""Elements of the secp256k1 base field, the integers modulo p."""

from __future__ import annotations

import functools
from collections.abc import Iterable, Sequence

from secpcurve import limbs
from secpcurve.limbs import FIELD_PRIME

__all__ = ["FIELD_PRIME", "FieldOverflowError", "FieldElement", "batch_inverse"]

_SQRT_EXPONENT = (FIELD_PRIME + 1) // 4
_EULER_EXPONENT = (FIELD_PRIME - 1) // 2
_INVERSE_EXPONENT = FIELD_PRIME - 2


class FieldOverflowError(ValueError):
    """Raised when an encoded value is not below the field prime."""


@functools.total_ordering
class FieldElement:
    """An immutable element of the field, kept in canonical form ``[0, p)``."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("a field element is built from an integer")
        self._value = value % FIELD_PRIME

    @property
    def value(self) -> int:
        """The canonical integer representative."""
        return self._value

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"FieldElement(0x{self._value:064x})"

    @classmethod
    def from_bytes(cls, data: bytes) -> FieldElement:
        """Decode 32 big-endian bytes; values at or above p are rejected."""
        raw = bytes(data)
        if len(raw) != 32:
            raise ValueError(f"expected 32 bytes, got {len(raw)}")
        number = int.from_bytes(raw, "big")
        if number >= FIELD_PRIME:
            raise FieldOverflowError("encoded value is not below the field prime")
        return cls(number)

    def to_bytes(self) -> bytes:
        """Encode as 32 big-endian bytes."""
        return self._value.to_bytes(32, "big")

    @classmethod
    def from_storage(cls, words: Sequence[int]) -> FieldElement:
        """Build an element from four little-endian 64-bit storage words."""
        return cls(limbs.from_limbs(limbs.from_storage(words)))

    def to_storage(self) -> tuple[int, int, int, int]:
        """Pack into four little-endian 64-bit storage words."""
        return limbs.to_storage(self._value)

    def is_zero(self) -> bool:
        return self._value == 0

    def is_odd(self) -> bool:
        return bool(self._value & 1)

    @staticmethod
    def _coerce(other: object) -> FieldElement | None:
        if isinstance(other, FieldElement):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return FieldElement(other)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((FieldElement, self._value))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self._value < other._value

    def __add__(self, other: object) -> FieldElement:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return FieldElement(self._value + operand._value)

    def __sub__(self, other: object) -> FieldElement:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return FieldElement(self._value - operand._value)

    def __neg__(self) -> FieldElement:
        return FieldElement(-self._value)

    def __mul__(self, other: object) -> FieldElement:
        operand = self._coerce(other)
        if operand is None:
            return NotImplemented
        return FieldElement(self._value * operand._value)

    def square(self) -> FieldElement:
        return FieldElement(self._value * self._value)

    def sqrt(self) -> FieldElement | None:
        """Return a square root that is itself a square, or None if none exists.

        Since p is 3 mod 4 the candidate is the (p+1)/4-th power, which is
        checked by squaring it back.
        """
        root = FieldElement(pow(self._value, _SQRT_EXPONENT, FIELD_PRIME))
        return root if root.square() == self else None

    def is_quad(self) -> bool:
        """Tell whether the element is a quadratic residue; zero counts as one."""
        return pow(self._value, _EULER_EXPONENT, FIELD_PRIME) != FIELD_PRIME - 1

    def inverse(self) -> FieldElement:
        """Return the multiplicative inverse; the inverse of zero is zero."""
        return FieldElement(pow(self._value, _INVERSE_EXPONENT, FIELD_PRIME))


def batch_inverse(elements: Iterable[FieldElement]) -> list[FieldElement]:
    """Invert many elements with a single field inversion."""
    items = list(elements)
    if not items:
        return []
    prefix = [items[0]]
    for element in items[1:]:
        prefix.append(prefix[-1] * element)
    running = prefix[-1].inverse()
    result: list[FieldElement] = [FieldElement(0)] * len(items)
    for position in range(len(items) - 1, 0, -1):
        result[position] = prefix[position - 1] * running
        running = running * items[position]
    result[0] = running
    return result