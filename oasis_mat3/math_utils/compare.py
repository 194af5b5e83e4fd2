################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Floating-point comparison predicate shared by the 3x3 helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass


# Absolute tolerance for scalar comparisons
COMPARE_ABS_TOL: float = 1e-8
# Relative tolerance for scalar comparisons, scaled by the larger magnitude
COMPARE_REL_TOL: float = 1e-12


@dataclass(frozen=True, slots=True)
class FloatCompare:
    """Absolute-or-relative scalar comparison.

    Two scalars are close when ``|x - y| <= max(abs_tol, rel_tol * max(|x|, |y|))``.

    The same instance must be used by matrix equality, the eigenvector branch
    selection and the eigenvector normalization fallback, so all three agree
    on what counts as zero.

    Attributes:
        abs_tol: Absolute tolerance, used near zero
        rel_tol: Relative tolerance, used for large magnitudes
    """

    abs_tol: float = COMPARE_ABS_TOL
    rel_tol: float = COMPARE_REL_TOL

    def __post_init__(self) -> None:
        """Validate tolerances."""
        _require_tolerance(self.abs_tol, "abs_tol")
        _require_tolerance(self.rel_tol, "rel_tol")

    def close(self, x: float, y: float) -> bool:
        """Return True when two scalars are equal within tolerance."""
        return math.isclose(x, y, rel_tol=self.rel_tol, abs_tol=self.abs_tol)

    def is_zero(self, x: float) -> bool:
        """Return True when a scalar is zero within tolerance."""
        return self.close(x, 0.0)


def _require_tolerance(value: float, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite")
    if value < 0.0:
        raise ValueError(f"{name} must be non-negative")


DEFAULT_COMPARE: FloatCompare = FloatCompare()
