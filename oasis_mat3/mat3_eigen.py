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
Closed-form eigen-decomposition of symmetric 3x3 matrices

Eigenvalues are the roots of the characteristic cubic

    lambda^3 + p lambda^2 + q lambda + r = 0

with p = -tr(D) and r = -det(D). The shift lambda = x - p/3 gives the
depressed cubic x^3 + a x + b = 0, which is solved with Cardano's formula in
trigonometric form. A real symmetric matrix has three real roots, so the
discriminant term b0 is non-negative up to round-off.

Eigenvectors are found by eliminating against the last row of D - lambda I.
Neither solver iterates and both are deterministic for identical input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from oasis_mat3 import mat3_ops
from oasis_mat3.config.mat3_params import Mat3Params
from oasis_mat3.mat3_types import Mat3
from oasis_mat3.mat3_types import Vec3
from oasis_mat3.math_utils.compare import DEFAULT_COMPARE
from oasis_mat3.math_utils.compare import FloatCompare


_LOG: logging.Logger = logging.getLogger(__name__)

# sqrt(3) / 2, the imaginary part of the complex cube roots of unity
_HALF_SQRT3: float = math.sqrt(0.75)

_DEFAULT_PARAMS: Mat3Params = Mat3Params.defaults()

_CANONICAL_VECTOR: Vec3 = Vec3((0.0, 0.0, 1.0))


@dataclass(frozen=True, slots=True)
class EigenvalueResult:
    """Eigenvalues of a symmetric 3x3 matrix.

    Attributes:
        values: The three eigenvalues in ascending order
        ok: False when the characteristic cubic degenerated numerically, in
            which case ``values`` is (0.0, 0.0, 0.0)
    """

    values: tuple[float, float, float]
    ok: bool


@dataclass(frozen=True, slots=True)
class EigenDecomposition:
    """Eigenvalues and one unit eigenvector per eigenvalue.

    Attributes:
        values: The three eigenvalues in ascending order
        vectors: ``vectors[k]`` belongs to ``values[k]``
        ok: False when the eigenvalue solve degenerated
    """

    values: tuple[float, float, float]
    vectors: tuple[Vec3, Vec3, Vec3]
    ok: bool


def eigenvalues(d: Mat3, params: Mat3Params | None = None) -> EigenvalueResult:
    """Return the eigenvalues of a symmetric matrix in ascending order.

    Symmetry of ``d`` is assumed and not enforced; only the upper triangle is
    read.

    Args:
        d: Symmetric matrix, integer or float
        params: Tolerances, defaults to ``Mat3Params.defaults()``

    Returns:
        EigenvalueResult with ``ok`` False and all-zero values when the
        discriminant term is negative beyond ``params.discriminant_tol``
    """
    cfg: Mat3Params = params if params is not None else _DEFAULT_PARAMS
    if not d.is_symmetric(cfg.compare()):
        _LOG.debug("eigenvalues called with an asymmetric matrix: %s", d.values)

    p: float
    q: float
    r: float
    p, q, r = _characteristic_cubic(d)

    # Depressed cubic x^3 + a x + b = 0
    a: float = q - p * p / 3.0
    b: float = 2.0 * p * p * p / 27.0 - p * q / 3.0 + r

    # A^3 = a0 + i b0, B^3 = a0 - i b0
    a0: float = -0.5 * b
    b0: float = -(0.25 * b * b + a * a * a / 27.0)
    if b0 < -cfg.discriminant_tol:
        _LOG.warning(
            "Eigenvalue solve degenerated, discriminant term %s < -%s",
            b0,
            cfg.discriminant_tol,
        )
        return EigenvalueResult(values=(0.0, 0.0, 0.0), ok=False)
    b0 = math.sqrt(abs(b0))

    magn: float = math.hypot(a0, b0)
    theta: float = math.atan2(b0, a0)

    # A + B and A - B (without the factor i)
    apb: float
    amb: float
    if magn > cfg.magnitude_tol:
        cbrt_magn: float = magn ** (1.0 / 3.0)
        apb = 2.0 * math.cos(theta / 3.0) * cbrt_magn
        amb = 2.0 * math.sin(theta / 3.0) * cbrt_magn
    else:
        apb = 0.0
        amb = 0.0

    shift: float = p / 3.0
    roots: list[float] = sorted(
        [
            apb - shift,
            -0.5 * apb + _HALF_SQRT3 * amb - shift,
            -0.5 * apb - _HALF_SQRT3 * amb - shift,
        ]
    )
    return EigenvalueResult(values=(roots[0], roots[1], roots[2]), ok=True)


def eigenvector(
    d: Mat3,
    lam: float,
    compare: FloatCompare | None = None,
) -> Vec3:
    """Return a unit eigenvector of a symmetric matrix for one eigenvalue.

    ``lam`` must be an eigenvalue of ``d``; this is not checked and any other
    value gives a meaningless unit vector. Scaling ``d`` and ``lam`` by the
    same positive factor gives the same vector. For a repeated eigenvalue the
    result is some unit vector, not necessarily in the eigenspace.

    Args:
        d: Symmetric matrix
        lam: Eigenvalue of ``d``
        compare: Scalar comparison used for the zero tests

    Returns:
        Unit vector, or (0, 0, 1) when the solution collapses to zero
    """
    cmp: FloatCompare = compare if compare is not None else DEFAULT_COMPARE

    # Work on D / max|D_ij| so the zero tests do not depend on the scale of D
    scale: float = max(abs(float(value)) for value in d.values)
    if scale == 0.0:
        return _CANONICAL_VECTOR
    mu: float = lam / scale

    d00: float = float(d.at(0, 0)) / scale
    d11: float = float(d.at(1, 1)) / scale
    d01: float = float(d.at(0, 1)) / scale
    d02: float = float(d.at(0, 2)) / scale
    d12: float = float(d.at(1, 2)) / scale
    d22_minus_mu: float = float(d.at(2, 2)) / scale - mu

    v0: float
    v1: float
    v2: float
    if cmp.is_zero(d22_minus_mu):
        # Last diagonal term vanishes, solve without dividing by it
        t: float = d02 * d12
        v0 = t - d12 * d12
        v1 = t - d02 * d02
        v2 = d12 * (d01 - d00 + mu) + d02 * (d01 - d11 + mu)
    else:
        a: float = d02 * d02 - (d00 - mu) * d22_minus_mu
        c: float = d12 * d12 - (d11 - mu) * d22_minus_mu

        # sign(b) for b = d02 d12 - d01 (d22 - mu)
        sign_b: int = 1 if d02 * d12 > d01 * d22_minus_mu else -1

        sqrt_a: float
        sqrt_c: float
        sign_ab: int
        if cmp.is_zero(a):
            sqrt_a = 0.0
            sqrt_c = math.sqrt(abs(c))
            sign_ab = 0
        else:
            if a > 0.0:
                sign_ab = sign_b
                sqrt_a = math.sqrt(a)
            else:
                sign_ab = -sign_b
                sqrt_a = math.sqrt(-a)
            # c may carry round-off of the wrong sign
            sqrt_c = 0.0 if cmp.is_zero(c) else math.sqrt(abs(c))

        v0 = d22_minus_mu * sqrt_c
        if sign_ab == 1:
            v1 = -sqrt_a * d22_minus_mu
            v2 = -(d02 * sqrt_c - d12 * sqrt_a)
        else:
            v1 = sqrt_a * d22_minus_mu
            v2 = -(d02 * sqrt_c + d12 * sqrt_a)

    norm: float = math.sqrt(v0 * v0 + v1 * v1 + v2 * v2)
    if cmp.is_zero(norm):
        return _CANONICAL_VECTOR
    inv_norm: float = 1.0 / norm
    return Vec3((v0 * inv_norm, v1 * inv_norm, v2 * inv_norm))


def eigen_decomposition(
    d: Mat3,
    params: Mat3Params | None = None,
) -> EigenDecomposition:
    """Return the eigenvalues of a symmetric matrix with their eigenvectors.

    When the eigenvalue solve degenerates, the values are zero and the
    vectors are the canonical basis.
    """
    cfg: Mat3Params = params if params is not None else _DEFAULT_PARAMS
    result: EigenvalueResult = eigenvalues(d, cfg)
    if not result.ok:
        basis: tuple[Vec3, Vec3, Vec3] = (
            Vec3((1.0, 0.0, 0.0)),
            Vec3((0.0, 1.0, 0.0)),
            Vec3((0.0, 0.0, 1.0)),
        )
        return EigenDecomposition(values=result.values, vectors=basis, ok=False)

    compare: FloatCompare = cfg.compare()
    vectors: list[Vec3] = [eigenvector(d, lam, compare) for lam in result.values]
    return EigenDecomposition(
        values=result.values,
        vectors=(vectors[0], vectors[1], vectors[2]),
        ok=True,
    )


def eigen_residual(d: Mat3, lam: float, v: Vec3) -> float:
    """Return ``|d v - lam v|``, the eigen-equation residual."""
    dv: Vec3 = mat3_ops.mat_vec(d, v)
    total: float = 0.0
    for i in range(3):
        diff: float = dv[i] - lam * v[i]
        total += diff * diff
    return math.sqrt(total)


def _characteristic_cubic(d: Mat3) -> tuple[float, float, float]:
    """Return (p, q, r) of lambda^3 + p lambda^2 + q lambda + r for symmetric d."""
    d00: float = float(d.at(0, 0))
    d11: float = float(d.at(1, 1))
    d22: float = float(d.at(2, 2))
    d01: float = float(d.at(0, 1))
    d02: float = float(d.at(0, 2))
    d12: float = float(d.at(1, 2))

    # -tr(D)
    p: float = -(d00 + d11 + d22)
    q: float = d00 * d11 + d00 * d22 + d11 * d22 - d01 * d01 - d02 * d02 - d12 * d12
    # -det(D)
    r: float = (
        d00 * d12 * d12
        + d11 * d02 * d02
        + d22 * d01 * d01
        - d00 * d11 * d22
        - 2.0 * d01 * d02 * d12
    )
    return p, q, r
