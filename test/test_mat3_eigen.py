################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the closed-form symmetric 3x3 eigen-solvers."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest
from numpy.typing import NDArray

import oasis_mat3
from oasis_mat3.config.mat3_params import Mat3Params
from oasis_mat3.mat3_eigen import EigenDecomposition
from oasis_mat3.mat3_eigen import EigenvalueResult
from oasis_mat3.mat3_eigen import eigen_decomposition
from oasis_mat3.mat3_eigen import eigen_residual
from oasis_mat3.mat3_eigen import eigenvalues
from oasis_mat3.mat3_eigen import eigenvector
from oasis_mat3.mat3_ops import determinant
from oasis_mat3.mat3_types import Mat3
from oasis_mat3.mat3_types import Vec3
from oasis_mat3.math_utils.compare import FloatCompare


# Eigen-equation residual accepted for well-separated eigenvalues
RESIDUAL_TOL: float = 1e-6


def _random_symmetric(rng: np.random.Generator) -> Mat3:
    mat: NDArray[np.float64] = rng.normal(size=(3, 3))
    return Mat3.from_array(mat + mat.T)


def _well_separated(rng: np.random.Generator, count: int) -> list[Mat3]:
    """Draw random symmetric matrices with separated eigenvalues and no
    near-zero eigenvector components."""
    result: list[Mat3] = []
    while len(result) < count:
        mat: Mat3 = _random_symmetric(rng)
        values: NDArray[np.float64]
        vectors: NDArray[np.float64]
        values, vectors = np.linalg.eigh(mat.to_array())
        if np.min(np.diff(values)) < 0.2 or np.min(np.abs(vectors)) < 0.05:
            continue
        result.append(mat)
    return result


def _abs_components(vec: Vec3) -> tuple[float, ...]:
    return tuple(abs(value) for value in vec)


def test_identity() -> None:
    """Checks the identity has a triple eigenvalue and a unit eigenvector."""
    identity: Mat3 = Mat3.identity()
    result: EigenvalueResult = eigenvalues(identity)
    assert result.ok
    assert result.values == pytest.approx((1.0, 1.0, 1.0))
    vec: Vec3 = eigenvector(identity, 1.0)
    assert math.isclose(vec.norm(), 1.0)
    assert eigen_residual(identity, 1.0, vec) < RESIDUAL_TOL


def test_diagonal() -> None:
    """Checks distinct diagonal entries and their axis eigenvectors."""
    diag: Mat3 = Mat3.diag(1.0, 2.0, 3.0)
    result: EigenvalueResult = eigenvalues(diag)
    assert result.ok
    assert result.values == pytest.approx((1.0, 2.0, 3.0), abs=1e-9)
    assert _abs_components(eigenvector(diag, 1.0)) == pytest.approx((1.0, 0.0, 0.0))
    assert _abs_components(eigenvector(diag, 2.0)) == pytest.approx((0.0, 1.0, 0.0))
    assert eigenvector(diag, 3.0) == Vec3.of(0.0, 0.0, 1.0)


def test_repeated_root() -> None:
    """Checks a double eigenvalue and the eigen-equation for each vector."""
    mat: Mat3 = Mat3.from_rows([[2.0, 1.0, 0.0], [1.0, 2.0, 0.0], [0.0, 0.0, 3.0]])
    result: EigenvalueResult = eigenvalues(mat)
    assert result.ok
    assert result.values == pytest.approx((1.0, 3.0, 3.0), abs=1e-6)
    expected: float = 1.0 / math.sqrt(2.0)
    simple: Vec3 = eigenvector(mat, 1.0)
    assert _abs_components(simple) == pytest.approx((expected, expected, 0.0))
    assert simple[0] * simple[1] < 0.0
    for lam in result.values:
        vec: Vec3 = eigenvector(mat, lam)
        assert math.isclose(vec.norm(), 1.0)
        assert eigen_residual(mat, lam, vec) < RESIDUAL_TOL


def test_integer_input() -> None:
    """Checks integer matrices are promoted to float."""
    mat: Mat3 = Mat3.from_rows([[2, 1, 0], [1, 2, 0], [0, 0, 3]])
    result: EigenvalueResult = eigenvalues(mat)
    assert result.ok
    assert all(isinstance(value, float) for value in result.values)
    assert result.values == pytest.approx((1.0, 3.0, 3.0), abs=1e-6)


def test_zero_matrix() -> None:
    """Checks a genuine zero matrix succeeds with zero eigenvalues."""
    zero: Mat3 = Mat3.zeros()
    result: EigenvalueResult = eigenvalues(zero)
    assert all(value == 0 for value in zero.values)
    assert result.ok
    assert result.values == (0.0, 0.0, 0.0)
    assert eigenvector(zero, 0.0) == Vec3.of(0.0, 0.0, 1.0)


def test_degenerate_discriminant(caplog: pytest.LogCaptureFixture) -> None:
    """Checks a round-off negative discriminant sets ok False and logs a warning."""
    # Double root at 3e4; round-off in b^2/4 + a^3/27 leaves b0 far below -1e-10
    mat: Mat3 = Mat3.from_rows(
        [[2.0e4, 1.0e4, 0.0], [1.0e4, 2.0e4, 0.0], [0.0, 0.0, 3.0e4]]
    )
    caplog.set_level(logging.WARNING, logger="oasis_mat3.mat3_eigen")
    result: EigenvalueResult = eigenvalues(mat)
    assert not result.ok
    assert result.values == (0.0, 0.0, 0.0)
    assert any("degenerated" in record.message for record in caplog.records)

    decomposition: EigenDecomposition = eigen_decomposition(mat)
    assert not decomposition.ok
    assert decomposition.vectors == (
        Vec3.of(1.0, 0.0, 0.0),
        Vec3.of(0.0, 1.0, 0.0),
        Vec3.of(0.0, 0.0, 1.0),
    )



def test_asymmetric_input_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Checks asymmetric input is logged at debug level and still solved."""
    caplog.set_level(logging.DEBUG, logger="oasis_mat3.mat3_eigen")
    mat: Mat3 = Mat3.from_rows([[1.0, 2.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    result: EigenvalueResult = eigenvalues(mat)
    assert result.ok
    assert any("asymmetric" in record.message for record in caplog.records)


def test_params_magnitude_tolerance() -> None:
    """Checks the magnitude tolerance is taken from the parameters."""
    params: Mat3Params = Mat3Params.from_dict({"magnitude_tol": 1.0})
    result: EigenvalueResult = eigenvalues(Mat3.diag(1.0, 2.0, 3.0), params)
    assert result.ok
    assert result.values == pytest.approx((2.0, 2.0, 2.0))


def test_injected_compare() -> None:
    """Checks the eigenvector zero tests use the injected comparison."""
    diag: Mat3 = Mat3.diag(1.0, 2.0, 3.0)
    loose: FloatCompare = FloatCompare(abs_tol=10.0)
    assert eigenvector(diag, 2.0, loose) == Vec3.of(0.0, 0.0, 1.0)


def test_random_matches_numpy() -> None:
    """Checks eigenvalues, ordering, trace and determinant on random input."""
    rng: np.random.Generator = np.random.default_rng(0)
    for _ in range(10):
        mat: Mat3 = _random_symmetric(rng)
        result: EigenvalueResult = eigenvalues(mat)
        assert result.ok
        values: tuple[float, float, float] = result.values
        assert values[0] <= values[1] <= values[2]
        reference: NDArray[np.float64] = np.linalg.eigvalsh(mat.to_array())
        assert np.allclose(values, reference, atol=1e-8)
        assert math.isclose(sum(values), mat.trace(), abs_tol=1e-9)
        assert math.isclose(
            values[0] * values[1] * values[2],
            determinant(mat),
            rel_tol=1e-8,
            abs_tol=1e-9,
        )


def test_random_eigenvectors() -> None:
    """Checks each eigenvector satisfies the eigen-equation with unit norm."""
    rng: np.random.Generator = np.random.default_rng(1)
    for mat in _well_separated(rng, 10):
        decomposition: EigenDecomposition = eigen_decomposition(mat)
        assert decomposition.ok
        assert decomposition.values == eigenvalues(mat).values
        for lam, vec in zip(decomposition.values, decomposition.vectors, strict=True):
            assert math.isclose(vec.norm(), 1.0)
            assert eigen_residual(mat, lam, vec) < RESIDUAL_TOL


def test_decomposition_diagonal() -> None:
    """Checks the decomposition of a diagonal matrix recovers the axes."""
    decomposition: EigenDecomposition = eigen_decomposition(Mat3.diag(1.0, 2.0, 3.0))
    assert decomposition.ok
    axes: list[tuple[float, ...]] = [_abs_components(vec) for vec in decomposition.vectors]
    assert axes[0] == pytest.approx((1.0, 0.0, 0.0))
    assert axes[1] == pytest.approx((0.0, 1.0, 0.0))
    assert axes[2] == pytest.approx((0.0, 0.0, 1.0))


def test_deterministic() -> None:
    """Checks repeated solves give bit-identical results."""
    mat: Mat3 = Mat3.from_rows([[4.0, 1.0, 2.0], [1.0, 3.0, 0.5], [2.0, 0.5, 5.0]])
    first: EigenDecomposition = eigen_decomposition(mat)
    second: EigenDecomposition = eigen_decomposition(mat)
    assert first == second


def test_small_diagonal_eigenvector() -> None:
    """Checks axis eigenvectors of a diagonal matrix with tiny entries."""
    diag: Mat3 = Mat3.diag(1e-4, 2e-4, 3e-4)
    assert _abs_components(eigenvector(diag, 1e-4)) == pytest.approx((1.0, 0.0, 0.0))
    assert _abs_components(eigenvector(diag, 2e-4)) == pytest.approx((0.0, 1.0, 0.0))
    assert _abs_components(eigenvector(diag, 3e-4)) == pytest.approx((0.0, 0.0, 1.0))
    for lam in eigenvalues(diag).values:
        assert eigen_residual(diag, lam, eigenvector(diag, lam)) < 1e-6 * 3e-4


@pytest.mark.parametrize("scale", [1e-6, 1e-4, 1e-2, 1.0, 1e2, 1e4, 1e6])
def test_scale_sweep(scale: float) -> None:
    """Checks eigenvalues and eigenvectors across matrix magnitudes."""
    rng: np.random.Generator = np.random.default_rng(5)
    for base in _well_separated(rng, 10):
        mat: Mat3 = base * scale
        result: EigenvalueResult = eigenvalues(mat)
        assert result.ok
        values: tuple[float, float, float] = result.values
        assert values[0] <= values[1] <= values[2]
        reference: NDArray[np.float64] = np.linalg.eigvalsh(mat.to_array())
        assert np.allclose(values, reference, rtol=1e-8, atol=1e-8 * scale)
        assert math.isclose(sum(values), mat.trace(), rel_tol=1e-9, abs_tol=1e-9 * scale)
        assert math.isclose(
            values[0] * values[1] * values[2],
            determinant(mat),
            rel_tol=1e-8,
            abs_tol=1e-9 * scale**3,
        )
        for lam in values:
            vec: Vec3 = eigenvector(mat, lam)
            assert math.isclose(vec.norm(), 1.0)
            assert eigen_residual(mat, lam, vec) < RESIDUAL_TOL * scale


def test_package_exports() -> None:
    """Checks the solvers are re-exported from the package."""
    assert oasis_mat3.eigen_residual is eigen_residual
    assert oasis_mat3.eigen_decomposition is eigen_decomposition
    assert "eigen_residual" in oasis_mat3.__all__
