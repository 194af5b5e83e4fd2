################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Closed-form arithmetic on 3x3 matrices and 3-vectors

Every function is pure and returns a new value. Integer inputs give integer
results; any float operand promotes the result to float. Preconditions such
as a non-zero determinant are the caller's responsibility and are not
checked.
"""

from __future__ import annotations

import numbers
from typing import NamedTuple
from typing import Union
from typing import overload

from oasis_mat3.mat3_types import Mat3
from oasis_mat3.mat3_types import Number
from oasis_mat3.mat3_types import Vec3
from oasis_mat3.math_utils.compare import DEFAULT_COMPARE
from oasis_mat3.math_utils.compare import FloatCompare


Scalar = Union[int, float]


class Mat3Inverse(NamedTuple):
    """Adjugate and determinant of a 3x3 matrix.

    The true inverse is ``adjugate / det``. Keeping them apart lets integer
    matrices be inverted exactly.
    """

    adjugate: Mat3
    det: Number

    def matrix(self) -> Mat3:
        """Return ``adjugate / det`` as a float matrix.

        Raises:
            ValueError: If the determinant is zero
        """
        if self.det == 0:
            raise ValueError("matrix is singular")
        inv_det: float = 1.0 / self.det
        return Mat3(tuple(value * inv_det for value in self.adjugate.values))


def determinant(a: Mat3) -> Number:
    """Return the determinant by cofactor expansion along row 0."""
    x: tuple[Number, ...] = a.values
    return (
        x[0] * (x[4] * x[8] - x[5] * x[7])
        + x[1] * (x[6] * x[5] - x[3] * x[8])
        + x[2] * (x[3] * x[7] - x[6] * x[4])
    )


def inverse(a: Mat3) -> Mat3Inverse:
    """Return the adjugate of a matrix together with its determinant.

    No zero-determinant check is made: for a singular matrix the adjugate is
    still returned and ``det`` is zero.

    Args:
        a: Matrix to invert

    Returns:
        ``Mat3Inverse(adjugate, det)``
    """
    x: tuple[Number, ...] = a.values
    adjugate: Mat3 = Mat3(
        (
            x[4] * x[8] - x[5] * x[7],
            x[2] * x[7] - x[1] * x[8],
            x[1] * x[5] - x[2] * x[4],
            x[5] * x[6] - x[3] * x[8],
            x[0] * x[8] - x[2] * x[6],
            x[2] * x[3] - x[0] * x[5],
            x[3] * x[7] - x[4] * x[6],
            x[1] * x[6] - x[0] * x[7],
            x[0] * x[4] - x[1] * x[3],
        )
    )
    return Mat3Inverse(adjugate=adjugate, det=determinant(a))


def transpose(a: Mat3) -> Mat3:
    return Mat3(tuple(a.at(j, i) for i in range(3) for j in range(3)))


def rotate(a: Mat3, k: int) -> Mat3:
    """Cyclically relabel the column axes of a matrix.

    Element (i, j) of the result is element (i, (j + k) mod 3) of ``a``.
    Rotations form a cyclic group of order 3, so ``k`` is taken modulo 3.

    Args:
        a: Matrix to rotate
        k: Number of axis shifts, any integer

    Returns:
        Rotated matrix
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise ValueError("k must be an int")
    shift: int = int(k) % 3
    return Mat3(tuple(a.at(i, (j + shift) % 3) for i in range(3) for j in range(3)))


def mat_mul(a: Mat3, b: Mat3) -> Mat3:
    """Return the matrix product ``a @ b``."""
    return Mat3(
        tuple(
            a.at(i, 0) * b.at(0, j) + a.at(i, 1) * b.at(1, j) + a.at(i, 2) * b.at(2, j)
            for i in range(3)
            for j in range(3)
        )
    )


def mat_vec(a: Mat3, v: Vec3) -> Vec3:
    """Return the matrix-vector product ``a @ v``."""
    return Vec3(
        tuple(a.at(i, 0) * v[0] + a.at(i, 1) * v[1] + a.at(i, 2) * v[2] for i in range(3))
    )


def scale(a: Mat3, s: Scalar) -> Mat3:
    """Multiply every element of a matrix by a scalar."""
    if isinstance(s, bool) or not isinstance(s, numbers.Real):
        raise ValueError("s must be a real number")
    return Mat3(tuple(s * value for value in a.values))


@overload
def multiply(a: Mat3, b: Mat3) -> Mat3: ...


@overload
def multiply(a: Mat3, b: Vec3) -> Vec3: ...


@overload
def multiply(a: Mat3, b: Scalar) -> Mat3: ...


@overload
def multiply(a: Scalar, b: Mat3) -> Mat3: ...


def multiply(a: Mat3 | Scalar, b: Mat3 | Vec3 | Scalar) -> Mat3 | Vec3:
    """Multiply a matrix by a matrix, a vector or a scalar.

    The scalar may be on either side.

    Raises:
        TypeError: If the operand combination is not supported
    """
    if isinstance(a, Mat3):
        if isinstance(b, Mat3):
            return mat_mul(a, b)
        if isinstance(b, Vec3):
            return mat_vec(a, b)
        if not isinstance(b, bool) and isinstance(b, numbers.Real):
            return scale(a, b)
    elif isinstance(b, Mat3) and not isinstance(a, bool) and isinstance(a, numbers.Real):
        return scale(b, a)
    raise TypeError(
        f"unsupported operands for multiply: {type(a).__name__}, {type(b).__name__}"
    )


def inner_product(u: Vec3, a: Mat3, v: Vec3) -> float:
    """Return ``u^T a v`` summed directly over all nine elements."""
    total: Number = 0
    for i in range(3):
        for j in range(3):
            total += u[i] * a.at(i, j) * v[j]
    return float(total)


def self_product(a: Mat3) -> Mat3:
    """Return ``a^T a``.

    The product is symmetric, so only the six upper-triangle dot products
    are computed.
    """
    x: tuple[Number, ...] = a.values
    s00: Number = x[0] * x[0] + x[3] * x[3] + x[6] * x[6]
    s01: Number = x[0] * x[1] + x[3] * x[4] + x[6] * x[7]
    s02: Number = x[0] * x[2] + x[3] * x[5] + x[6] * x[8]
    s11: Number = x[1] * x[1] + x[4] * x[4] + x[7] * x[7]
    s12: Number = x[1] * x[2] + x[4] * x[5] + x[7] * x[8]
    s22: Number = x[2] * x[2] + x[5] * x[5] + x[8] * x[8]
    return Mat3((s00, s01, s02, s01, s11, s12, s02, s12, s22))


def squared_norm_under_metric(metric: Mat3, u: Vec3) -> Number:
    """Return the squared magnitude ``u . metric . u`` for a symmetric metric.

    Only the upper triangle of ``metric`` is read; off-diagonal terms are
    counted twice.
    """
    m: tuple[Number, ...] = metric.values
    return (
        m[0] * u[0] * u[0]
        + m[4] * u[1] * u[1]
        + m[8] * u[2] * u[2]
        + 2 * (m[1] * u[0] * u[1] + m[2] * u[0] * u[2] + m[5] * u[1] * u[2])
    )


def approximately_equal(
    a: Mat3,
    b: Mat3,
    compare: FloatCompare | None = None,
) -> bool:
    """Return True when all corresponding elements match.

    Integer matrices are compared exactly. Otherwise every element pair must
    pass ``compare``.
    """
    if a.is_integer and b.is_integer:
        return a.values == b.values
    cmp: FloatCompare = compare if compare is not None else DEFAULT_COMPARE
    return all(cmp.close(x, y) for x, y in zip(a.values, b.values, strict=True))
