"""Arithmetic on 256-bit field values held as five 52-bit limbs.

A value is a tuple ``(n0, n1, n2, n3, n4)`` meaning
``n0 + n1*2**52 + n2*2**104 + n3*2**156 + n4*2**208``, taken modulo the
secp256k1 field prime.  Limbs may hold more than 52 bits ("magnitude" above
one); the normalisation helpers bring them back to canonical form.

The storage form is four 64-bit little-endian words.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "FIELD_PRIME",
    "to_limbs",
    "from_limbs",
    "normalize",
    "normalize_weak",
    "normalizes_to_zero",
    "negate",
    "to_storage",
    "from_storage",
    "storage_cmov",
]

FIELD_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F

_LIMB_COUNT = 5
_WORD_COUNT = 4
_MASK52 = 0xFFFFFFFFFFFFF
_MASK48 = 0x0FFFFFFFFFFFF
_MASK64 = (1 << 64) - 1
# 2**256 mod p, the factor used to fold bits above position 256 back in.
_REDUCE = 0x1000003D1
# Lowest limb of the prime; the other limbs of p are all ones.
_PRIME_LOW = 0xFFFFEFFFFFC2F

Limbs = tuple[int, int, int, int, int]


def _check_limbs(limbs: Sequence[int]) -> list[int]:
    values = list(limbs)
    if len(values) != _LIMB_COUNT:
        raise ValueError(f"expected {_LIMB_COUNT} limbs, got {len(values)}")
    for limb in values:
        if not isinstance(limb, int) or not 0 <= limb <= _MASK64:
            raise ValueError(f"limb out of range: {limb!r}")
    return values


def _check_words(words: Sequence[int]) -> tuple[int, ...]:
    values = tuple(words)
    if len(values) != _WORD_COUNT:
        raise ValueError(f"expected {_WORD_COUNT} words, got {len(values)}")
    for word in values:
        if not isinstance(word, int) or not 0 <= word <= _MASK64:
            raise ValueError(f"storage word out of range: {word!r}")
    return values


def _propagate(limbs: Sequence[int]) -> list[int]:
    """Carry the four low limbs into their successors, leaving them 52 bits wide."""
    out: list[int] = []
    carry = 0
    for limb in limbs[:-1]:
        limb += carry
        out.append(limb & _MASK52)
        carry = limb >> 52
    out.append(limbs[-1] + carry)
    return out


def _first_pass(limbs: Sequence[int]) -> list[int]:
    """Fold bits above 2**256 into the bottom limb and carry once."""
    t = _check_limbs(limbs)
    overflow = t[4] >> 48
    t[4] &= _MASK48
    t[0] += overflow * _REDUCE
    return _propagate(t)


def to_limbs(value: int) -> Limbs:
    """Split an integer in ``[0, 2**256)`` into normalised limbs."""
    if not isinstance(value, int) or not 0 <= value < 1 << 256:
        raise ValueError("value must be an integer in [0, 2**256)")
    low = tuple((value >> (52 * shift)) & _MASK52 for shift in range(4))
    return (*low, value >> 208)  # type: ignore[return-value]


def from_limbs(limbs: Sequence[int]) -> int:
    """Return the integer a limb tuple stands for, without reducing it."""
    return sum(limb << (52 * position) for position, limb in enumerate(_check_limbs(limbs)))


def normalize_weak(limbs: Sequence[int]) -> Limbs:
    """Reduce to magnitude one; the result may still be at or above the prime."""
    return tuple(_first_pass(limbs))  # type: ignore[return-value]


def normalize(limbs: Sequence[int]) -> Limbs:
    """Fully reduce to the canonical representation in ``[0, p)``."""
    t = _first_pass(limbs)
    middle = t[1] & t[2] & t[3]
    at_or_above_prime = (t[4] >> 48) or (
        t[4] == _MASK48 and middle == _MASK52 and t[0] >= _PRIME_LOW
    )
    if at_or_above_prime:
        t[0] += _REDUCE
        t = _propagate(t)
        t[4] &= _MASK48
    return tuple(t)  # type: ignore[return-value]


def normalizes_to_zero(limbs: Sequence[int]) -> bool:
    """Tell whether the limbs represent zero modulo the prime."""
    t = _first_pass(limbs)
    all_zero = t[0] | t[1] | t[2] | t[3] | t[4]
    all_prime = (t[0] ^ 0x1000003D0) & t[1] & t[2] & t[3] & (t[4] ^ 0xF000000000000)
    return all_zero == 0 or all_prime == _MASK52


def negate(limbs: Sequence[int], magnitude: int) -> Limbs:
    """Return the additive inverse of limbs whose magnitude is at most ``magnitude``.

    The result has magnitude ``magnitude + 1``.
    """
    if not isinstance(magnitude, int) or magnitude < 0:
        raise ValueError("magnitude must be a non-negative integer")
    t = _check_limbs(limbs)
    factor = 2 * (magnitude + 1)
    bounds = (_PRIME_LOW, _MASK52, _MASK52, _MASK52, _MASK48)
    result = tuple(bound * factor - limb for bound, limb in zip(bounds, t))
    if any(limb < 0 for limb in result):
        raise ValueError(f"limbs exceed the stated magnitude {magnitude}")
    return result  # type: ignore[return-value]


def to_storage(value: int | Sequence[int]) -> tuple[int, int, int, int]:
    """Pack a normalised value (integer or limbs) into four 64-bit words."""
    if isinstance(value, int):
        number = from_limbs(to_limbs(value))
    else:
        t = _check_limbs(value)
        if any(limb > _MASK52 for limb in t[:4]) or t[4] > _MASK48:
            raise ValueError("limbs must be normalised before conversion to storage")
        number = from_limbs(t)
    return tuple((number >> (64 * shift)) & _MASK64 for shift in range(_WORD_COUNT))  # type: ignore[return-value]


def from_storage(words: Sequence[int]) -> Limbs:
    """Unpack four 64-bit words into normalised limbs."""
    number = sum(word << (64 * position) for position, word in enumerate(_check_words(words)))
    return to_limbs(number)


def storage_cmov(
    current: Sequence[int], candidate: Sequence[int], flag: bool
) -> tuple[int, int, int, int]:
    """Return ``candidate`` when ``flag`` is true, otherwise ``current``."""
    kept = _check_words(current)
    replacement = _check_words(candidate)
    return replacement if flag else kept  # type: ignore[return-value]