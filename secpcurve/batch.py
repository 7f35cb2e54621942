"""Conversion of many Jacobian points to affine form with shared inversions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from secpcurve.curve import AffinePoint, JacobianPoint
from secpcurve.field import FieldElement, batch_inverse

__all__ = ["to_affine_all", "to_affine_table", "globalz_table"]


def _scale_by_zinv(point: JacobianPoint, zinv: FieldElement) -> AffinePoint:
    """Apply ``(X*zi^2, Y*zi^3)`` and keep the infinity flag of ``point``."""
    zinv2 = zinv.square()
    zinv3 = zinv2 * zinv
    return AffinePoint(point.x * zinv2, point.y * zinv3, point.at_infinity, point.curve)


def _check_table(
    points: Sequence[JacobianPoint], ratios: Sequence[FieldElement]
) -> None:
    if len(points) != len(ratios):
        raise ValueError(
            f"expected one ratio per point, got {len(ratios)} for {len(points)} points"
        )


def to_affine_all(points: Iterable[JacobianPoint]) -> list[AffinePoint]:
    """Convert every point to affine form using one field inversion in total.

    Points at infinity become the affine point at infinity.
    """
    items = list(points)
    finite_z = [point.z for point in items if not point.at_infinity]
    inverses = iter(batch_inverse(finite_z))
    result: list[AffinePoint] = []
    for point in items:
        if point.at_infinity:
            result.append(AffinePoint.infinity(point.curve))
        else:
            result.append(_scale_by_zinv(point, next(inverses)))
    return result


def to_affine_table(
    points: Sequence[JacobianPoint], ratios: Sequence[FieldElement]
) -> list[AffinePoint]:
    """Convert a table of points with known Z ratios to affine form.

    ``ratios[i]`` must satisfy ``points[i-1].z * ratios[i] == points[i].z``;
    ``ratios[0]`` is ignored.  Only the last Z coordinate is inverted.
    """
    points = list(points)
    ratios = list(ratios)
    _check_table(points, ratios)
    if not points:
        return []
    zinv = points[-1].z.inverse()
    result = [_scale_by_zinv(points[-1], zinv)]
    for index in range(len(points) - 1, 0, -1):
        zinv = zinv * ratios[index]
        result.append(_scale_by_zinv(points[index - 1], zinv))
    result.reverse()
    return result


def globalz_table(
    points: Sequence[JacobianPoint], ratios: Sequence[FieldElement]
) -> tuple[list[AffinePoint], FieldElement | None]:
    """Bring a table of points with known Z ratios to one common Z.

    Returns the rescaled ``(x, y)`` pairs as points and the shared Z, which
    is the Z of the last input; each entry stands for ``(x/Z^2, y/Z^3)``.
    With no points the shared Z is None.
    """
    points = list(points)
    ratios = list(ratios)
    _check_table(points, ratios)
    if not points:
        return [], None
    last = points[-1]
    globalz = last.z
    result = [AffinePoint(last.x, last.y, False, last.curve)]
    scale = ratios[-1]
    for index in range(len(points) - 1, 0, -1):
        if index != len(points) - 1:
            scale = scale * ratios[index]
        result.append(_scale_by_zinv(points[index - 1], scale))
    result.reverse()
    return result, globalz