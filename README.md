# secpcurve

Field and group arithmetic for the secp256k1 elliptic curve, written in plain
Python with no dependencies.

## What is in it

- `secpcurve.limbs` — the 5×52-bit limb representation of 256-bit field
  values: `to_limbs`, `from_limbs`, `normalize`, `normalize_weak`,
  `normalizes_to_zero`, `negate`, and packing to and from four 64-bit
  little-endian storage words with `to_storage`, `from_storage` and
  `storage_cmov`. `FIELD_PRIME` holds p = 2^256 − 2^32 − 977.
- `secpcurve.field` — `FieldElement`, an immutable element of the field kept
  in canonical form. It supports `+`, `-`, unary `-`, `*` (with other elements
  or plain integers), ordering and hashing, plus `square`, `sqrt`, `is_quad`,
  `inverse`, `is_zero`, `is_odd`, 32-byte big-endian encoding
  (`from_bytes`, `to_bytes`) and storage words (`from_storage`,
  `to_storage`). `batch_inverse` inverts a list of elements with a single
  inversion. `FieldOverflowError` is raised by `from_bytes` when the bytes
  encode a value not below p.
- `secpcurve.curve` — `Curve` (a curve y² = x³ + b with a generator),
  `AffinePoint` and `JacobianPoint`. Three curves are provided: `SECP256K1`
  and two small-order curves over the same field, `SMALL_CURVE_13` and
  `SMALL_CURVE_199`, useful for exhaustive checks of the group law. `BETA` is
  the cube root of unity used by `AffinePoint.mul_lambda`.
- `secpcurve.batch` — `to_affine_all`, `to_affine_table` and
  `globalz_table`, which bring many Jacobian points to affine form (or to a
  common Z) with shared inversions.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Field elements

```python
from secpcurve.field import FieldElement, FieldOverflowError

x = FieldElement(5)
assert x * x.inverse() == FieldElement(1)

root = FieldElement(4).sqrt()          # None when no square root exists
assert root is not None and root.square() == FieldElement(4)

data = FieldElement(0x1234).to_bytes()
assert FieldElement.from_bytes(data) == FieldElement(0x1234)
```

`sqrt` returns a root that is itself a square, or `None`. `is_quad` counts zero
as a quadratic residue. The inverse of zero is zero.

## Points

```python
from secpcurve.curve import SECP256K1, SMALL_CURVE_13, AffinePoint, JacobianPoint

g = SECP256K1.generator
assert g.is_valid()
assert AffinePoint.from_x_odd(g.x, g.y.is_odd()) == g

j = JacobianPoint.from_affine(g)
three_g = j.double().add_affine(g)
assert three_g.to_affine() == j.add(j.double()).to_affine()

# The small curve's generator has order 13.
small_g = SMALL_CURVE_13.generator
p = JacobianPoint.infinity(SMALL_CURVE_13)
for _ in range(13):
    p = p.add_affine(small_g)
assert p.is_infinity()
```

`JacobianPoint` also offers `double_with_ratio`, `add_with_ratio` and
`add_affine_with_ratio` (which return the Z ratio of the result to the left
operand), `add_affine_unified` (one formula for addition and doubling),
`add_zinv`, `rescale`, `eq_x` and `has_quad_y`. `AffinePoint` has
`from_x_quad`, negation, `mul_lambda` and `to_storage` / `from_storage`.

## What it does not do

The package stops at field and point arithmetic. It has no scalar type, no
multiplication of points by scalars, no key generation, signing or
verification, and no command-line tool.

The arithmetic is meant for correctness and study. It does not run in
constant time and should not handle secret values in production.