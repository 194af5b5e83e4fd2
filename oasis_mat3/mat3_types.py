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
Value types for 3-vectors and 3x3 matrices

Matrices are stored as a flat row-major tuple of nine scalars. Element (i, j)
is stored at ``values[3 * i + j]``:

    | 0 1 2 |
    | 3 4 5 |
    | 6 7 8 |

Elements are Python ``int`` or ``float``. A value holding only ints is an
integer value; arithmetic with any float operand promotes to float, so the
same code serves both element types.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable
from typing import Iterator
from typing import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from oasis_mat3.math_utils.compare import DEFAULT_COMPARE
from oasis_mat3.math_utils.compare import FloatCompare


Number = Union[int, float]


def mat3_index(i: int, j: int) -> int:
    """Return the flat row-major index of element (i, j).

    Raises:
        ValueError: If either index is outside [0, 2]
    """
    if not (0 <= i < 3 and 0 <= j < 3):
        raise ValueError("row and column indices must be in [0, 2]")
    return 3 * i + j


def _as_scalar(value: object, name: str) -> Number:
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"{name} elements must be numbers, not bool")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        scalar: float = float(value)
        if not math.isfinite(scalar):
            raise ValueError(f"{name} elements must be finite")
        return scalar
    raise ValueError(f"{name} elements must be real numbers")


def _as_values(values: Iterable[object], size: int, name: str) -> tuple[Number, ...]:
    items: tuple[object, ...] = tuple(values)
    if len(items) != size:
        raise ValueError(f"{name} must have {size} elements")
    return tuple(_as_scalar(item, name) for item in items)


@dataclass(frozen=True, slots=True)
class Vec3:
    """Immutable 3-vector.

    Attributes:
        values: The three components (x, y, z)
    """

    values: tuple[Number, Number, Number]

    def __post_init__(self) -> None:
        """Validate and normalize the components."""
        object.__setattr__(self, "values", _as_values(self.values, 3, "Vec3"))

    @classmethod
    def of(cls, x: Number, y: Number, z: Number) -> Vec3:
        """Build a vector from three components."""
        return cls((x, y, z))

    @classmethod
    def from_array(cls, array: NDArray[np.generic] | Sequence[Number]) -> Vec3:
        """Build a vector from a numpy array or sequence of shape (3,)."""
        arr: NDArray[np.generic] = np.asarray(array)
        if arr.shape != (3,):
            raise ValueError("Vec3 array must have shape (3,)")
        return cls(tuple(arr.tolist()))

    def to_array(self) -> NDArray[np.float64]:
        """Return the components as a float64 numpy array."""
        return np.array(self.values, dtype=np.float64)

    @property
    def x(self) -> Number:
        return self.values[0]

    @property
    def y(self) -> Number:
        return self.values[1]

    @property
    def z(self) -> Number:
        return self.values[2]

    @property
    def is_integer(self) -> bool:
        """True when every component is an int."""
        return all(isinstance(value, int) for value in self.values)

    def norm(self) -> float:
        """Return the Euclidean norm."""
        return math.sqrt(sum(value * value for value in self.values))

    def __getitem__(self, k: int) -> Number:
        return self.values[k]

    def __iter__(self) -> Iterator[Number]:
        return iter(self.values)

    def __len__(self) -> int:
        return 3


@dataclass(frozen=True, slots=True)
class Mat3:
    """Immutable 3x3 matrix in row-major order.

    Attributes:
        values: The nine elements, row-major
    """

    values: tuple[Number, ...]

    def __post_init__(self) -> None:
        """Validate and normalize the elements."""
        object.__setattr__(self, "values", _as_values(self.values, 9, "Mat3"))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Number]]) -> Mat3:
        """Build a matrix from three rows of three elements."""
        if len(rows) != 3 or any(len(row) != 3 for row in rows):
            raise ValueError("Mat3 rows must be 3 sequences of 3 elements")
        return cls(tuple(value for row in rows for value in row))

    @classmethod
    def from_array(cls, array: NDArray[np.generic] | Sequence[Number]) -> Mat3:
        """Build a matrix from a numpy array of shape (3, 3) or (9,)."""
        arr: NDArray[np.generic] = np.asarray(array)
        if arr.shape not in ((3, 3), (9,)):
            raise ValueError("Mat3 array must have shape (3, 3) or (9,)")
        return cls(tuple(arr.reshape(9).tolist()))

    @classmethod
    def identity(cls) -> Mat3:
        return cls.diag(1, 1, 1)

    @classmethod
    def zeros(cls) -> Mat3:
        return cls((0,) * 9)

    @classmethod
    def diag(cls, d0: Number, d1: Number, d2: Number) -> Mat3:
        """Build a diagonal matrix."""
        return cls((d0, 0, 0, 0, d1, 0, 0, 0, d2))

    def to_rows(self) -> list[list[Number]]:
        """Return the matrix as three row lists."""
        return [list(self.values[3 * i : 3 * i + 3]) for i in range(3)]

    def to_array(self) -> NDArray[np.float64]:
        """Return the matrix as a (3, 3) float64 numpy array."""
        return np.array(self.values, dtype=np.float64).reshape(3, 3)

    def at(self, i: int, j: int) -> Number:
        """Return element (i, j)."""
        return self.values[mat3_index(i, j)]

    def row(self, i: int) -> Vec3:
        return Vec3(tuple(self.values[mat3_index(i, 0) : mat3_index(i, 2) + 1]))

    def col(self, j: int) -> Vec3:
        return Vec3(tuple(self.values[mat3_index(0, j) :: 3]))

    def trace(self) -> Number:
        return self.values[0] + self.values[4] + self.values[8]

    @property
    def is_integer(self) -> bool:
        """True when every element is an int."""
        return all(isinstance(value, int) for value in self.values)

    def is_symmetric(self, compare: FloatCompare = DEFAULT_COMPARE) -> bool:
        """Return True when a(i, j) matches a(j, i) for all off-diagonal pairs."""
        if self.is_integer:
            rows: NDArray[np.int_] = np.asarray(self.to_rows())
            return bool(np.array_equal(rows, rows.T))
        mat: NDArray[np.float64] = self.to_array()
        return bool(np.allclose(mat, mat.T, rtol=compare.rel_tol, atol=compare.abs_tol))

    @property
    def T(self) -> Mat3:
        from oasis_mat3 import mat3_ops

        return mat3_ops.transpose(self)

    def __getitem__(self, index: tuple[int, int]) -> Number:
        i, j = index
        return self.at(i, j)

    def __matmul__(self, other: Mat3 | Vec3) -> Mat3 | Vec3:
        from oasis_mat3 import mat3_ops

        if isinstance(other, Mat3):
            return mat3_ops.mat_mul(self, other)
        if isinstance(other, Vec3):
            return mat3_ops.mat_vec(self, other)
        return NotImplemented

    def __mul__(self, other: Number) -> Mat3:
        from oasis_mat3 import mat3_ops

        if isinstance(other, (bool, np.bool_)) or not isinstance(other, numbers.Real):
            return NotImplemented
        return mat3_ops.scale(self, other)

    def __rmul__(self, other: Number) -> Mat3:
        return self.__mul__(other)
