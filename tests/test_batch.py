import pytest

from secpcurve.batch import globalz_table, to_affine_all, to_affine_table
from secpcurve.curve import SECP256K1, SMALL_CURVE_13, AffinePoint, JacobianPoint
from secpcurve.field import FieldElement


def _chain(curve, length, start_scale=5):
    """Build G, 2G, ... with Z ratios recorded by the addition formulas."""
    generator = curve.generator
    first = JacobianPoint.from_affine(generator).rescale(FieldElement(start_scale))
    points = [first]
    ratios = [FieldElement(0)]
    for _ in range(length - 1):
        nxt, ratio = points[-1].add_affine_with_ratio(generator)
        points.append(nxt)
        ratios.append(ratio)
    return points, ratios


def test_chain_ratios_hold():
    points, ratios = _chain(SECP256K1, 6)
    for previous, current, ratio in zip(points, points[1:], ratios[1:]):
        assert previous.z * ratio == current.z


def test_to_affine_all_matches_individual_conversion():
    points, _ = _chain(SECP256K1, 5)
    points = [p.rescale(FieldElement(k + 2)) for k, p in enumerate(points)]
    converted = to_affine_all(points)
    assert converted == [p.to_affine() for p in points]
    assert all(p.is_valid() for p in converted)


def test_to_affine_all_first_is_generator():
    points, _ = _chain(SECP256K1, 3)
    assert to_affine_all(points)[0] == SECP256K1.generator


def test_to_affine_all_handles_infinity():
    points, _ = _chain(SECP256K1, 3)
    mixed = [JacobianPoint.infinity(), points[0], JacobianPoint.infinity(), points[2]]
    converted = to_affine_all(mixed)
    assert converted[0].at_infinity
    assert converted[2].at_infinity
    assert converted[1] == points[0].to_affine()
    assert converted[3] == points[2].to_affine()


def test_to_affine_all_empty():
    assert to_affine_all([]) == []
    assert to_affine_all([JacobianPoint.infinity()]) == [AffinePoint.infinity()]


def test_to_affine_table_matches_individual_conversion():
    points, ratios = _chain(SECP256K1, 7)
    table = to_affine_table(points, ratios)
    assert table == [p.to_affine() for p in points]


def test_to_affine_table_ignores_first_ratio():
    points, ratios = _chain(SECP256K1, 4)
    ratios[0] = FieldElement(12345)
    assert to_affine_table(points, ratios) == [p.to_affine() for p in points]


def test_to_affine_table_empty_and_mismatch():
    assert to_affine_table([], []) == []
    points, ratios = _chain(SECP256K1, 3)
    with pytest.raises(ValueError):
        to_affine_table(points, ratios[:2])


def test_globalz_table_shares_last_z():
    points, ratios = _chain(SECP256K1, 6)
    table, globalz = globalz_table(points, ratios)
    assert globalz == points[-1].z
    assert len(table) == len(points)
    for entry, original in zip(table, points):
        rebuilt = JacobianPoint(entry.x, entry.y, globalz)
        assert rebuilt.to_affine() == original.to_affine()
        assert rebuilt.is_valid()


def test_globalz_table_last_entry_unchanged():
    points, ratios = _chain(SECP256K1, 3)
    table, _ = globalz_table(points, ratios)
    assert table[-1].x == points[-1].x
    assert table[-1].y == points[-1].y
    assert not table[-1].at_infinity


def test_globalz_table_empty_and_mismatch():
    assert globalz_table([], []) == ([], None)
    points, ratios = _chain(SECP256K1, 2)
    with pytest.raises(ValueError):
        globalz_table(points, ratios + [FieldElement(1)])


def test_small_curve_group_batch_conversion():
    # Every non-zero multiple of the order-13 generator, with varied Z values.
    points, ratios = _chain(SMALL_CURVE_13, 12, start_scale=3)
    affine = to_affine_all(points)
    assert all(p.is_valid() for p in affine)
    assert len({(p.x, p.y) for p in affine}) == 12
    assert to_affine_table(points, ratios) == affine
    # 12G is the negation of G.
    assert affine[11] == -SMALL_CURVE_13.generator
    assert points[11].add_affine(SMALL_CURVE_13.generator).is_infinity()