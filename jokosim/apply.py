# jokosim/apply.py
import logging
from typing import Sequence

import numpy as np

from .errors import ArityMismatchError, InvalidQubitCountError
from .state import check_qubit_index, freeze

logger = logging.getLogger(__name__)

def group_offsets(target_qubits: Sequence[int], n: int) -> np.ndarray:
    """
    Offset each local sub-index j (0..2^k-1) adds to a group's base index.
    Bit k-1-b of j belongs to target_qubits[b], which sits at global bit
    n-1-target_qubits[b] (qubit 0 is the MSB on both sides).
    """
    k = len(target_qubits)
    offsets = np.zeros(1 << k, dtype=np.int64)
    for j in range(1 << k):
        for b, q in enumerate(target_qubits):
            if (j >> (k - 1 - b)) & 1:
                offsets[j] |= 1 << (n - 1 - q)
    return offsets

def apply_gate(psi: np.ndarray, U: np.ndarray, target_qubits: Sequence[int], n: int) -> np.ndarray:
    """
    Apply a k-qubit matrix U (2^k x 2^k) to `target_qubits` of an n-qubit state.

    The 2^n basis indices split into groups of 2^k that agree on every bit
    outside the targets. Each group is visited once through its base (all
    target bits cleared): gather its amplitudes, multiply by U, scatter them
    back to the same positions. Returns a new state, psi is left untouched.
    """
    psi = np.asarray(psi)
    U = np.asarray(U)
    targets = [int(q) for q in target_qubits]
    k = len(targets)
    dim = 1 << k

    if psi.shape != (1 << n,):
        raise InvalidQubitCountError(f"state has shape {psi.shape}, expected ({1 << n},) for {n} qubits")
    if k == 0:
        raise ArityMismatchError("gate needs at least one target qubit")
    if U.shape != (dim, dim):
        raise ArityMismatchError(
            f"Gate matrix size {U.shape} does not match targetQubits count {k} "
            f"(expected {dim}x{dim})")
    for q in targets:
        check_qubit_index(q, n)
    if len(set(targets)) != k:
        raise ArityMismatchError(f"target qubits must be distinct, got {targets}")

    offsets = group_offsets(targets, n)
    mask = int(offsets[-1])  # all target bits set
    idx = np.arange(1 << n)
    bases = idx[(idx & mask) == 0]

    groups = bases[:, None] | offsets[None, :]   # (2^(n-k), 2^k)
    out = np.empty_like(psi, dtype=np.result_type(psi, U))
    # row-wise: new[g, r] = sum_c U[r, c] * old[g, c]
    out[groups] = psi[groups] @ U.T
    logger.debug("applied %dx%d gate to qubits %s (%d groups)", dim, dim, targets, len(bases))
    return freeze(out)
