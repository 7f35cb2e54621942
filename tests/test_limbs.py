import pytest
from hypothesis import given
from hypothesis import strategies as st

from secpcurve.limbs import (
    FIELD_PRIME,
    from_limbs,
    from_storage,
    negate,
    normalize,
    normalize_weak,
    normalizes_to_zero,
    storage_cmov,
    to_limbs,
    to_storage,
)

MASK52 = 0xFFFFFFFFFFFFF
MASK48 = 0x0FFFFFFFFFFFF

values = st.integers(min_value=0, max_value=(1 << 256) - 1)
field_values = st.integers(min_value=0, max_value=FIELD_PRIME - 1)
words = st.tuples(*[st.integers(min_value=0, max_value=(1 << 64) - 1)] * 4)
loose_limbs = st.tuples(
    *[st.integers(min_value=0, max_value=16 * MASK52)] * 4,
    st.integers(min_value=0, max_value=16 * MASK48),
)


def add_limbs(a, b):
    return tuple(x + y for x, y in zip(a, b))


def test_prime_limbs_match_documented_layout():
    assert to_limbs(FIELD_PRIME) == (0xFFFFEFFFFFC2F, MASK52, MASK52, MASK52, MASK48)


def test_prime_normalizes_to_zero():
    assert normalize(to_limbs(FIELD_PRIME)) == (0, 0, 0, 0, 0)
    assert normalizes_to_zero(to_limbs(FIELD_PRIME))


def test_zero_and_one():
    assert normalizes_to_zero((0, 0, 0, 0, 0))
    assert not normalizes_to_zero(to_limbs(1))
    assert normalize(to_limbs(1)) == to_limbs(1)


def test_storage_of_one():
    assert to_storage(1) == (1, 0, 0, 0)
    assert from_storage((1, 0, 0, 0)) == to_limbs(1)


@given(values)
def test_limb_round_trip(value):
    assert from_limbs(to_limbs(value)) == value


@given(values)
def test_limbs_within_bounds(value):
    limbs = to_limbs(value)
    assert all(limb <= MASK52 for limb in limbs[:4])
    assert limbs[4] <= MASK48


@given(loose_limbs)
def test_normalize_reduces(limbs):
    result = normalize(limbs)
    assert from_limbs(result) == from_limbs(limbs) % FIELD_PRIME


@given(field_values)
def test_normalize_keeps_canonical(value):
    assert normalize(to_limbs(value)) == to_limbs(value)


@given(loose_limbs)
def test_normalize_weak_congruent_and_bounded(limbs):
    result = normalize_weak(limbs)
    assert from_limbs(result) % FIELD_PRIME == from_limbs(limbs) % FIELD_PRIME
    assert all(limb <= MASK52 for limb in result[:4])
    assert result[4] < 1 << 49


@given(loose_limbs)
def test_normalizes_to_zero_agrees_with_reduction(limbs):
    assert normalizes_to_zero(limbs) == (from_limbs(limbs) % FIELD_PRIME == 0)


def test_twice_prime_is_zero():
    prime = to_limbs(FIELD_PRIME)
    assert normalizes_to_zero(add_limbs(prime, prime))
    assert normalize(add_limbs(prime, prime)) == (0, 0, 0, 0, 0)


@given(field_values)
def test_negate_sums_to_zero(value):
    limbs = to_limbs(value)
    negated = negate(limbs, 1)
    assert normalizes_to_zero(add_limbs(limbs, negated))
    assert from_limbs(normalize(negated)) == (-value) % FIELD_PRIME


@given(loose_limbs)
def test_negate_with_larger_magnitude(limbs):
    negated = negate(limbs, 16)
    assert (from_limbs(negated) + from_limbs(limbs)) % FIELD_PRIME == 0


def test_negate_rejects_too_small_magnitude():
    with pytest.raises(ValueError):
        negate((10 * MASK52, 0, 0, 0, 0), 1)


def test_negate_rejects_negative_magnitude():
    with pytest.raises(ValueError):
        negate(to_limbs(1), -1)


@pytest.mark.parametrize("bad", [-1, 1 << 256])
def test_to_limbs_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        to_limbs(bad)


def test_wrong_limb_count_rejected():
    with pytest.raises(ValueError):
        from_limbs((1, 2, 3))
    with pytest.raises(ValueError):
        normalize((0, 0, 0, 0, 0, 0))


def test_negative_limb_rejected():
    with pytest.raises(ValueError):
        normalize_weak((-1, 0, 0, 0, 0))


@given(words)
def test_storage_round_trip(stored):
    assert to_storage(from_storage(stored)) == stored


@given(values)
def test_storage_from_int_and_limbs_agree(value):
    assert to_storage(value) == to_storage(to_limbs(value))
    assert from_limbs(from_storage(to_storage(value))) == value


def test_to_storage_rejects_unnormalized_limbs():
    with pytest.raises(ValueError):
        to_storage((MASK52 + 1, 0, 0, 0, 0))


def test_from_storage_rejects_bad_words():
    with pytest.raises(ValueError):
        from_storage((0, 0, 0))
    with pytest.raises(ValueError):
        from_storage((1 << 64, 0, 0, 0))


@given(words, words)
def test_storage_cmov(current, candidate):
    assert storage_cmov(current, candidate, True) == candidate
    assert storage_cmov(current, candidate, False) == current


def test_storage_cmov_rejects_bad_length():
    with pytest.raises(ValueError):
        storage_cmov((0, 0, 0, 0), (0, 0), True)