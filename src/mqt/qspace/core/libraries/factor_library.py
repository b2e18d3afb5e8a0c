# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Factor Library.

Ready-made factors with a populated operator catalogue:

- :func:`osc`: harmonic oscillator truncated to ``levels`` Fock states, with ``"d"`` (lowering),
  ``"u"`` (raising), ``"n"`` (number), ``"x"`` (in-phase quadrature) and ``"y"`` (out-of-phase quadrature).
- :func:`qubit`: two-level system in the computational basis with ``"d"`` (sigma minus), ``"u"`` (sigma plus)
  and the Pauli operators ``"x"``, ``"y"``, ``"z"``.
"""

from __future__ import annotations

import numpy as np
import scipy.sparse

from ..data_structures.spaces import DTYPE, Factor


def osc(levels: int, name: str = "") -> Factor:
    """Harmonic oscillator in the Fock basis.

    Args:
        levels: Number of Fock levels kept.
        name: Display name, defaults to ``"Osc(levels)"``.

    Returns:
        The oscillator factor.

    Raises:
        InvalidDimensionError: If ``levels`` is not positive.
    """
    if not name:
        name = f"Osc({levels})"
    factor = Factor(levels, name)

    # d|n> = sqrt(n)|n-1>
    n = np.arange(1, factor.dim)
    lowering = scipy.sparse.csr_matrix(
        (np.sqrt(n).astype(DTYPE), (n - 1, n)), shape=(factor.dim, factor.dim), dtype=DTYPE
    )
    factor.ops["d"] = lowering
    factor.ops["u"] = lowering.conj().T.tocsr()
    factor.ops["n"] = scipy.sparse.diags(np.arange(factor.dim).astype(DTYPE), format="csr")
    factor.ops["x"] = (factor("d") + factor("u")).tocsr()
    factor.ops["y"] = (1j * (factor("u") - factor("d"))).tocsr()
    return factor


def qubit(name: str = "Qubit") -> Factor:
    """Qubit in the computational basis, ``"z" = 2 n - 1`` replaces the number operator."""
    factor = osc(2, name)
    factor.ops["z"] = (2 * factor("n") - factor("i")).tocsr()
    del factor.ops["n"]
    return factor
