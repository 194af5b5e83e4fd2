################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Closed-form linear algebra for 3x3 matrices and 3-vectors."""

from __future__ import annotations

from oasis_mat3.config.mat3_params import Mat3Params
from oasis_mat3.mat3_eigen import EigenDecomposition
from oasis_mat3.mat3_eigen import EigenvalueResult
from oasis_mat3.mat3_eigen import eigen_decomposition
from oasis_mat3.mat3_eigen import eigen_residual
from oasis_mat3.mat3_eigen import eigenvalues
from oasis_mat3.mat3_eigen import eigenvector
from oasis_mat3.mat3_ops import Mat3Inverse
from oasis_mat3.mat3_ops import approximately_equal
from oasis_mat3.mat3_ops import determinant
from oasis_mat3.mat3_ops import inner_product
from oasis_mat3.mat3_ops import inverse
from oasis_mat3.mat3_ops import multiply
from oasis_mat3.mat3_ops import rotate
from oasis_mat3.mat3_ops import self_product
from oasis_mat3.mat3_ops import squared_norm_under_metric
from oasis_mat3.mat3_ops import transpose
from oasis_mat3.mat3_types import Mat3
from oasis_mat3.mat3_types import Vec3
from oasis_mat3.math_utils.compare import DEFAULT_COMPARE
from oasis_mat3.math_utils.compare import FloatCompare


__all__ = [
    "DEFAULT_COMPARE",
    "EigenDecomposition",
    "EigenvalueResult",
    "FloatCompare",
    "Mat3",
    "Mat3Inverse",
    "Mat3Params",
    "Vec3",
    "approximately_equal",
    "determinant",
    "eigen_decomposition",
    "eigen_residual",
    "eigenvalues",
    "eigenvector",
    "inner_product",
    "inverse",
    "multiply",
    "rotate",
    "self_product",
    "squared_norm_under_metric",
    "transpose",
]
