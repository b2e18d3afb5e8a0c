# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Tensor-Product Spaces.

This module defines the Hilbert-space objects of mqt.qspace. A :class:`Factor` is a single subsystem with a
dimension, a name and a catalogue of named sparse operators. A :class:`Space` is an ordered tensor product of
factors together with a catalogue of joint operators; the factor order fixes the index order of every operator
on the space. Both support name lookup (``space("xz")``) and construction of canonical basis elements
(``space[i]``, ``space[i, j]`` and the per-factor form ``space[i1, i2, ..., j1, j2, ...]``).
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from math import prod
from typing import TYPE_CHECKING, Any

import numpy as np
import scipy.sparse

from ..exceptions import InvalidDimensionError, MalformedIndexingError, UnknownOperatorNameError
from .view import ravel_index, storage_layout

if TYPE_CHECKING:
    from collections.abc import Sequence

IDENTITY = "i"
TENSOR_SEPARATOR = " ⊗ "
DTYPE = np.complex128


def _check_operators(ops: dict[str, Any], length: int, *, allow_kets: bool) -> None:
    """Raise a ValueError if an operator in ``ops`` does not fit a space of the given length."""
    allowed = [(length, length)]
    if allow_kets:
        allowed += [(length, 1), (length,)]
    for key, op in ops.items():
        if tuple(op.shape) not in allowed:
            msg = f"Operator {key!r} has shape {tuple(op.shape)}, expected one of {allowed}."
            raise ValueError(msg)


class QObject(metaclass=ABCMeta):
    """Common base class of :class:`Factor` and :class:`Space`.

    Attributes:
        ops: Catalogue of named operators, ordered by insertion.
    """

    ops: dict[str, Any]

    @property
    @abstractmethod
    def factors(self) -> list[Factor]:
        """The tensor factors, in index order."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name."""

    @property
    @abstractmethod
    def size(self) -> int | tuple[int, ...]:
        """Dimension of a factor, or the per-factor dimensions of a space."""

    @property
    def dims(self) -> tuple[int, ...]:
        """Per-factor dimensions, in factor order."""
        return tuple(f.dim for f in self.factors)

    @property
    def num_factors(self) -> int:
        """Number of tensor factors."""
        return len(self.factors)

    def __len__(self) -> int:
        """Total dimension, i.e. the product of all factor dimensions."""
        return prod(self.dims)

    def __call__(self, op_name: str) -> Any:  # noqa: ANN401
        """Look up a named operator.

        Raises:
            UnknownOperatorNameError: If no operator of that name exists.
        """
        try:
            return self.ops[op_name]
        except KeyError:
            msg = f"{self.name} has no operator {op_name!r}; available: {', '.join(self.ops)}."
            raise UnknownOperatorNameError(msg) from None

    def __mul__(self, other: object) -> Space:
        """Tensor product with another factor or space."""
        if not isinstance(other, QObject):
            return NotImplemented
        from ..methods.tensor_product import tensor  # noqa: PLC0415

        return tensor(self, other)

    def __getitem__(self, index: int | tuple[int, ...]) -> scipy.sparse.csr_matrix:
        """Canonical basis element.

        ``obj[i]`` is the ket ``|i>`` and ``obj[i, j]`` the operator ``|i><j|``, both in flat indices.
        Any other number of indices is read as a per-factor multi-index, see :meth:`basis`.
        """
        indices = index if isinstance(index, tuple) else (index,)
        if len(indices) == 1:
            return self._ket(indices[0])
        if len(indices) == 2:
            return self._operator(*indices)
        return self.basis(*indices)

    def basis(self, *indices: int) -> scipy.sparse.csr_matrix:
        """Basis element addressed in per-factor coordinates.

        With one index per factor the result is the product ket ``|i1 i2 ...>``, with two indices per
        factor (all row indices first) the operator ``|i1 i2 ...><j1 j2 ...|``.

        Raises:
            MalformedIndexingError: If the number of indices is neither ``n`` nor ``2n`` for ``n`` factors.
        """
        num_factors = self.num_factors
        if len(indices) == 2 * num_factors:
            shape, perm = storage_layout(self.dims, 2)
            col, row = divmod(int(ravel_index(indices, shape, perm)), len(self))
            return self._operator(row, col)
        if len(indices) == num_factors:
            shape, perm = storage_layout(self.dims, 1)
            return self._ket(int(ravel_index(indices, shape, perm)))
        msg = (
            f"Basis elements of {self.name} take {num_factors} (ket) or {2 * num_factors} (operator) "
            f"indices, got {len(indices)}."
        )
        raise MalformedIndexingError(msg)

    def _check_flat_index(self, i: int) -> int:
        if not 0 <= i < len(self):
            msg = f"Index {i} out of bounds for dimension {len(self)}."
            raise IndexError(msg)
        return int(i)

    def _ket(self, i: int) -> scipy.sparse.csr_matrix:
        i = self._check_flat_index(i)
        return scipy.sparse.csr_matrix(([1.0], ([i], [0])), shape=(len(self), 1), dtype=DTYPE)

    def _operator(self, i: int, j: int) -> scipy.sparse.csr_matrix:
        i, j = self._check_flat_index(i), self._check_flat_index(j)
        return scipy.sparse.csr_matrix(([1.0], ([i], [j])), shape=(len(self), len(self)), dtype=DTYPE)

    def __str__(self) -> str:
        """Summary of name, dimensions and operator catalogue."""
        ops = '", "'.join(self.ops)
        return "\n".join([
            f"{type(self).__name__}: {self.name}",
            f"Dims  : {self.size}",
            f'Ops   : "{ops}"',
        ])


class Factor(QObject):
    """A single Hilbert-space factor.

    Attributes:
        dim: Hilbert-space dimension.
        ops: Named ``dim x dim`` operators; always contains the identity under ``"i"``.
    """

    def __init__(self, dim: int, name: str, ops: dict[str, Any] | None = None) -> None:
        """Initialize the factor.

        Args:
            dim: Dimension of the factor, must be positive.
            name: Display name.
            ops: Named operators on the factor. The identity is added under ``"i"`` when missing.

        Raises:
            InvalidDimensionError: If ``dim`` is not a positive integer.
            ValueError: If an operator is not ``dim x dim``.
        """
        if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim <= 0:
            msg = f"Dimension must be a positive integer, got {dim!r}."
            raise InvalidDimensionError(msg)
        self.dim = int(dim)
        self._name = name
        identity = scipy.sparse.identity(self.dim, dtype=DTYPE, format="csr")
        if ops is None:
            ops = {IDENTITY: identity}
        else:
            _check_operators(ops, self.dim, allow_kets=False)
            if IDENTITY not in ops:
                ops = {IDENTITY: identity, **ops}
        self.ops = ops

    @property
    def factors(self) -> list[Factor]:
        """A factor is its own only factor."""
        return [self]

    @property
    def name(self) -> str:
        """Display name."""
        return self._name

    @property
    def size(self) -> int:
        """Dimension."""
        return self.dim

    def as_space(self) -> Space:
        """One-factor space sharing this factor's operators."""
        return Space(self)

    def __repr__(self) -> str:
        """Constructor-like representation."""
        return f"Factor(dim={self.dim}, name={self.name!r})"


class Space(QObject):
    """Ordered tensor product of :class:`Factor` objects.

    Attributes:
        factors: The factors; their order defines the index order of every operator on the space.
        ops: Named joint operators (``N x N``) or kets (``N x 1``) with ``N = len(space)``.
    """

    def __init__(self, factors: Factor | Sequence[Factor], ops: dict[str, Any] | None = None) -> None:
        """Initialize the space.

        A space built from a single factor shares that factor's operator catalogue. Use
        :func:`~mqt.qspace.core.methods.tensor_product.tensor` to build a space whose catalogue holds the
        products of the factors' operators.

        Args:
            factors: A single factor or a non-empty sequence of factors.
            ops: Named joint operators. Defaults to the factor's catalogue for a single factor and to an
                empty catalogue otherwise.

        Raises:
            ValueError: If no factor is given or an operator does not fit the space.
            TypeError: If an entry of ``factors`` is not a Factor.
        """
        if isinstance(factors, Factor):
            self._factors = [factors]
            self.ops = factors.ops if ops is None else ops
        else:
            self._factors = list(factors)
            if not self._factors:
                msg = "A space needs at least one factor."
                raise ValueError(msg)
            if not all(isinstance(f, Factor) for f in self._factors):
                msg = "All factors of a space must be Factor instances."
                raise TypeError(msg)
            self.ops = {} if ops is None else ops
        _check_operators(self.ops, len(self), allow_kets=True)

    @classmethod
    def from_dim(cls, dim: int, name: str) -> Space:
        """One-factor space with a fresh factor of the given dimension."""
        return cls(Factor(dim, name))

    @property
    def factors(self) -> list[Factor]:
        """The factors, in index order."""
        return self._factors

    @property
    def name(self) -> str:
        """Factor names joined by the tensor-product sign."""
        return TENSOR_SEPARATOR.join(f.name for f in self._factors)

    @property
    def size(self) -> tuple[int, ...]:
        """Per-factor dimensions."""
        return self.dims

    def __repr__(self) -> str:
        """Short representation."""
        return f"Space({self.name!r}, dims={self.dims})"
