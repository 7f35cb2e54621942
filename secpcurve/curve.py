"""Points on short Weierstrass curves ``y^2 = x^3 + b`` over the secp256k1 field.

Two representations are offered: affine points ``(x, y)`` and Jacobian points
``(X, Y, Z)`` standing for ``(X/Z^2, Y/Z^3)``.  Besides secp256k1 itself, two
small-order curves over the same field are provided; they are handy for
exhaustive checks of the group law.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from secpcurve.field import FieldElement

__all__ = [
    "Curve",
    "AffinePoint",
    "JacobianPoint",
    "SECP256K1",
    "SMALL_CURVE_13",
    "SMALL_CURVE_199",
    "BETA",
]

# A nontrivial cube root of unity in the field; multiplying x by it is the
# efficiently computable endomorphism of the curve.
BETA = FieldElement(0x7AE96A2B657C07106E64479EAC3434E99CF0497512F58995C1396C28719501EE)

_ONE = FieldElement(1)
_ZERO = FieldElement(0)


@dataclass(frozen=True)
class Curve:
    """A curve ``y^2 = x^3 + b`` with a chosen generator."""

    name: str
    b: FieldElement
    generator_x: FieldElement
    generator_y: FieldElement

    @property
    def generator(self) -> AffinePoint:
        """The generator as an affine point."""
        return AffinePoint(self.generator_x, self.generator_y, False, self)


SECP256K1 = Curve(
    "secp256k1",
    FieldElement(7),
    FieldElement(0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798),
    FieldElement(0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8),
)

SMALL_CURVE_13 = Curve(
    "order-13",
    FieldElement(2),
    FieldElement(0xEDC60018A51A786B2EA91F4D4C9416C09DE54C3BA13165546CF4345C7277EF15),
    FieldElement(0x54CB1B6BDC8C1273087844EA43F4603E0EAF9A43F6EFFE55939F806D37ADF8AC),
)

SMALL_CURVE_199 = Curve(
    "order-199",
    FieldElement(4),
    FieldElement(0xFA7CC9A70737F2DBA749DD392B4FB0693B017A7DA808C2F1FB12940C9EA66C18),
    FieldElement(0x78AC123A5ED8AEF38732BC911F3A286848DF246C808DAE72CFE525727F0501ED),
)


@dataclass(frozen=True)
class AffinePoint:
    """A point in affine coordinates, or the point at infinity."""

    x: FieldElement
    y: FieldElement
    at_infinity: bool = False
    curve: Curve = field(default=SECP256K1)

    @classmethod
    def infinity(cls, curve: Curve = SECP256K1) -> AffinePoint:
        return cls(_ZERO, _ZERO, True, curve)

    @classmethod
    def from_x_quad(cls, x: FieldElement, curve: Curve = SECP256K1) -> AffinePoint | None:
        """Return the point with this x whose y is a square, or None if x is not on the curve."""
        y = (x.square() * x + curve.b).sqrt()
        if y is None:
            return None
        return cls(x, y, False, curve)

    @classmethod
    def from_x_odd(
        cls, x: FieldElement, odd: bool, curve: Curve = SECP256K1
    ) -> AffinePoint | None:
        """Return the point with this x and the requested parity of y, or None."""
        point = cls.from_x_quad(x, curve)
        if point is None:
            return None
        if point.y.is_odd() != bool(odd):
            return cls(x, -point.y, False, curve)
        return point

    def is_valid(self) -> bool:
        """Tell whether the point lies on its curve; infinity is not valid."""
        if self.at_infinity:
            return False
        return self.y.square() == self.x.square() * self.x + self.curve.b

    def __neg__(self) -> AffinePoint:
        return AffinePoint(self.x, -self.y, self.at_infinity, self.curve)

    def mul_lambda(self) -> AffinePoint:
        """Apply the endomorphism ``(x, y) -> (beta*x, y)``."""
        return AffinePoint(self.x * BETA, self.y, self.at_infinity, self.curve)

    def to_storage(self) -> tuple[tuple[int, int, int, int], tuple[int, int, int, int]]:
        """Pack both coordinates into storage words; infinity cannot be stored."""
        if self.at_infinity:
            raise ValueError("the point at infinity has no storage form")
        return self.x.to_storage(), self.y.to_storage()

    @classmethod
    def from_storage(
        cls, data: Sequence[Sequence[int]], curve: Curve = SECP256K1
    ) -> AffinePoint:
        x_words, y_words = data
        return cls(FieldElement.from_storage(x_words), FieldElement.from_storage(y_words), False, curve)


@dataclass(frozen=True)
class JacobianPoint:
    """A point in Jacobian coordinates ``(X, Y, Z)`` meaning ``(X/Z^2, Y/Z^3)``."""

    x: FieldElement
    y: FieldElement
    z: FieldElement
    at_infinity: bool = False
    curve: Curve = field(default=SECP256K1)

    @classmethod
    def infinity(cls, curve: Curve = SECP256K1) -> JacobianPoint:
        return cls(_ZERO, _ZERO, _ZERO, True, curve)

    @classmethod
    def from_affine(cls, point: AffinePoint) -> JacobianPoint:
        return cls(point.x, point.y, _ONE, point.at_infinity, point.curve)

    def is_infinity(self) -> bool:
        return self.at_infinity

    def is_valid(self) -> bool:
        """Check ``Y^2 = X^3 + b*Z^6``; infinity is not valid."""
        if self.at_infinity:
            return False
        z2 = self.z.square()
        z6 = z2.square() * z2
        return self.y.square() == self.x.square() * self.x + z6 * self.curve.b

    def __neg__(self) -> JacobianPoint:
        return JacobianPoint(self.x, -self.y, self.z, self.at_infinity, self.curve)

    def _infinite(self) -> JacobianPoint:
        return JacobianPoint.infinity(self.curve)

    def double(self) -> JacobianPoint:
        return self.double_with_ratio()[0]

    def double_with_ratio(self) -> tuple[JacobianPoint, FieldElement]:
        """Double the point; also return the ratio of the new Z to the old one."""
        if self.at_infinity:
            return self._infinite(), _ONE
        ratio = self.y * 2
        z = self.z * self.y * 2
        t1 = self.x.square() * 3
        t2 = t1.square()
        t3 = self.y.square() * 2
        t4 = t3.square() * 2
        t3 = t3 * self.x
        x = t2 - t3 * 4
        t3 = t3 * 6 - t2
        y = t1 * t3 - t4
        return JacobianPoint(x, y, z, False, self.curve), ratio

    def _combine(
        self,
        u1: FieldElement,
        u2: FieldElement,
        s1: FieldElement,
        s2: FieldElement,
        z_factor: FieldElement | None,
    ) -> tuple[JacobianPoint, FieldElement]:
        h = u2 - u1
        i = s2 - s1
        if h.is_zero():
            if i.is_zero():
                return self.double_with_ratio()
            return self._infinite(), _ZERO
        h2 = h.square()
        h3 = h * h2
        if z_factor is not None:
            h = h * z_factor
        z = self.z * h
        t = u1 * h2
        x = i.square() - t * 2 - h3
        y = (t - x) * i - h3 * s1
        return JacobianPoint(x, y, z, False, self.curve), h

    def add(self, other: JacobianPoint) -> JacobianPoint:
        if self.at_infinity:
            return other
        return self.add_with_ratio(other)[0]

    def add_with_ratio(self, other: JacobianPoint) -> tuple[JacobianPoint, FieldElement]:
        """Add two Jacobian points; also return the ratio of the result's Z to this one's."""
        if self.at_infinity:
            raise ValueError("no Z ratio exists when the left operand is infinity")
        if other.at_infinity:
            return self, _ONE
        z22 = other.z.square()
        z12 = self.z.square()
        u1 = self.x * z22
        u2 = other.x * z12
        s1 = self.y * z22 * other.z
        s2 = other.y * z12 * self.z
        return self._combine(u1, u2, s1, s2, other.z)

    def add_affine(self, other: AffinePoint) -> JacobianPoint:
        if self.at_infinity:
            return JacobianPoint.from_affine(other)
        return self.add_affine_with_ratio(other)[0]

    def add_affine_with_ratio(self, other: AffinePoint) -> tuple[JacobianPoint, FieldElement]:
        """Add an affine point; also return the ratio of the result's Z to this one's."""
        if self.at_infinity:
            raise ValueError("no Z ratio exists when the left operand is infinity")
        if other.at_infinity:
            return self, _ONE
        z12 = self.z.square()
        u2 = other.x * z12
        s2 = other.y * z12 * self.z
        return self._combine(self.x, u2, self.y, s2, None)

    def add_affine_unified(self, other: AffinePoint) -> JacobianPoint:
        """Add a finite affine point with one formula for addition and doubling."""
        if other.at_infinity:
            raise ValueError("the affine operand must not be infinity")
        zz = self.z.square()
        u1 = self.x
        u2 = other.x * zz
        s1 = self.y
        s2 = other.y * zz * self.z
        t = u1 + u2
        m = s1 + s2
        rr = t.square() - u1 * u2
        degenerate = m.is_zero() and rr.is_zero()
        if degenerate:
            # y1 == -y2 with x1 != x2: use lambda = (y1 - y2) / (x1 - x2).
            rr_alt = s1 * 2
            m_alt = u1 - u2
        else:
            rr_alt = rr
            m_alt = m
        n = m_alt.square()
        q = n * t
        n = m if degenerate else n.square()
        z = self.z * m_alt
        infinity = z.is_zero() and not self.at_infinity
        z = z * 2
        q = -q
        t = rr_alt.square() + q
        x = t
        t = (t * 2 + q) * rr_alt + n
        y = -t
        x = x * 4
        y = y * 4
        if self.at_infinity:
            x, y, z = other.x, other.y, _ONE
        return JacobianPoint(x, y, z, infinity, self.curve)

    def add_zinv(self, other: AffinePoint, bzinv: FieldElement) -> JacobianPoint:
        """Add ``other`` taken as having Z coordinate ``1/bzinv``."""
        if other.at_infinity:
            return self
        if self.at_infinity:
            bzinv2 = bzinv.square()
            bzinv3 = bzinv2 * bzinv
            return JacobianPoint(other.x * bzinv2, other.y * bzinv3, _ONE, False, self.curve)
        az = self.z * bzinv
        z12 = az.square()
        u2 = other.x * z12
        s2 = other.y * z12 * az
        return self._combine(self.x, u2, self.y, s2, None)[0]

    def rescale(self, factor: FieldElement) -> JacobianPoint:
        """Multiply the coordinates by ``(s^2, s^3, s)`` for a non-zero ``s``."""
        if factor.is_zero():
            raise ValueError("rescale factor must be non-zero")
        zz = factor.square()
        return JacobianPoint(
            self.x * zz, self.y * zz * factor, self.z * factor, self.at_infinity, self.curve
        )

    def to_affine(self) -> AffinePoint:
        if self.at_infinity:
            return AffinePoint.infinity(self.curve)
        zi = self.z.inverse()
        zi2 = zi.square()
        return AffinePoint(self.x * zi2, self.y * zi2 * zi, False, self.curve)

    def eq_x(self, x: FieldElement) -> bool:
        """Tell whether the affine x coordinate equals ``x``."""
        if self.at_infinity:
            raise ValueError("the point at infinity has no x coordinate")
        return self.z.square() * x == self.x

    def has_quad_y(self) -> bool:
        """Tell whether the affine y coordinate is a quadratic residue."""
        if self.at_infinity:
            return False
        return (self.y * self.z).is_quad()