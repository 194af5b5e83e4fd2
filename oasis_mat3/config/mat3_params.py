################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from typing import Mapping

from oasis_mat3.math_utils.compare import COMPARE_ABS_TOL
from oasis_mat3.math_utils.compare import COMPARE_REL_TOL
from oasis_mat3.math_utils.compare import FloatCompare


# Discriminant term below -DISCRIMINANT_TOL means the cubic degenerated
DISCRIMINANT_TOL: float = 1e-10
# Polar magnitude at or below MAGNITUDE_TOL means a triple root
MAGNITUDE_TOL: float = 1e-24


@dataclass(frozen=True, slots=True)
class Mat3Params:
    """Tolerance parameters for the 3x3 solvers.

    Responsibility:
        Hold every numerical threshold used by the arithmetic helpers and the
        closed-form eigen-solvers, so callers tune them in one place.

    Data contract:
        - compare_abs_tol: absolute tolerance of the shared scalar comparison.
        - compare_rel_tol: relative tolerance of the shared scalar comparison.
        - discriminant_tol: how far below zero the cubic discriminant term may
          fall before the eigenvalue solve is reported as degenerate.
        - magnitude_tol: polar magnitude below which both cube roots are taken
          as zero (triple root).

    Determinism and edge cases:
        - Parameters are explicit inputs; nothing is read from the
          environment.
        - validate() rejects negative or non-finite tolerances.
        - The defaults 1e-10 and 1e-24 are observable through the eigenvalue
          results and must stay stable.
    """

    compare_abs_tol: float
    compare_rel_tol: float
    discriminant_tol: float
    magnitude_tol: float

    @staticmethod
    def defaults() -> Mat3Params:
        """Return a stable default parameter set."""
        params: Mat3Params = Mat3Params(
            compare_abs_tol=COMPARE_ABS_TOL,
            compare_rel_tol=COMPARE_REL_TOL,
            discriminant_tol=DISCRIMINANT_TOL,
            magnitude_tol=MAGNITUDE_TOL,
        )
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> Mat3Params:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: Mat3Params = cls.defaults()
        result: Mat3Params = cls(
            compare_abs_tol=cls._as_float(
                "compare_abs_tol",
                params.get("compare_abs_tol", defaults.compare_abs_tol),
            ),
            compare_rel_tol=cls._as_float(
                "compare_rel_tol",
                params.get("compare_rel_tol", defaults.compare_rel_tol),
            ),
            discriminant_tol=cls._as_float(
                "discriminant_tol",
                params.get("discriminant_tol", defaults.discriminant_tol),
            ),
            magnitude_tol=cls._as_float(
                "magnitude_tol",
                params.get("magnitude_tol", defaults.magnitude_tol),
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        for name in self._field_order():
            value: float = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
            if value < 0.0:
                raise ValueError(f"{name} must be >= 0")

    def compare(self) -> FloatCompare:
        """Return the scalar comparison configured by these parameters."""
        return FloatCompare(abs_tol=self.compare_abs_tol, rel_tol=self.compare_rel_tol)

    @classmethod
    def _field_order(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))

    @staticmethod
    def _as_float(name: str, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{name} must be a float")
        return float(value)
