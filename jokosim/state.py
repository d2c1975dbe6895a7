# jokosim/state.py
# State vectors are plain 1-D complex128 arrays of length 2**n.
# Index i is the basis state whose binary form is i, qubit 0 being the
# most significant bit (2 qubits: 0->|00>, 1->|01>, 2->|10>, 3->|11>).
# Everything returned from here is a fresh, read-only array.
import logging
from typing import Optional, Tuple

import numpy as np

from .complexmath import complex_to_string, magnitude_squared
from .errors import IndexOutOfRangeError, InvalidQubitCountError, NormalizationError

logger = logging.getLogger(__name__)

MAX_QUBITS = 16
KET_EPSILON = 1e-9    # terms with |amp|^2 below this are left out of kets
NORM_EPSILON = 1e-12  # collapse norms at or below this are not divided by

def freeze(psi: np.ndarray) -> np.ndarray:
    psi.flags.writeable = False
    return psi

def check_qubit_count(n: int):
    if not 1 <= n <= MAX_QUBITS:
        raise InvalidQubitCountError(f"numQubits must be in [1, {MAX_QUBITS}], got {n}")

def check_qubit_index(q: int, n: int):
    if not 0 <= q < n:
        raise IndexOutOfRangeError(f"Qubit index {q} is out of range for a {n}-qubit system.")

def create_initial_state(n: int, dtype=np.complex128) -> np.ndarray:
    """|00...0>: amplitude 1 at index 0, zero elsewhere."""
    check_qubit_count(n)
    psi = np.zeros(1 << n, dtype=dtype)
    psi[0] = 1.0 + 0.0j
    return freeze(psi)

def get_probabilities(psi: np.ndarray) -> np.ndarray:
    return magnitude_squared(psi)

def _indices(n: int) -> np.ndarray:
    return np.arange(1 << n)

def get_qubit_probability(psi: np.ndarray, q: int, n: int) -> float:
    """P(qubit q reads 1), marginalised over every other qubit."""
    check_qubit_index(q, n)
    ones = (_indices(n) >> (n - 1 - q)) & 1
    return float(get_probabilities(psi)[ones == 1].sum())

def bloch_vector(psi: np.ndarray, q: int, n: int) -> Tuple[float, float, float]:
    """
    (x, y, z) = (<X>, <Y>, <Z>) of qubit q, i.e. its point on the Bloch
    sphere after tracing out the other qubits. Length 1 for a qubit that is
    not entangled, shorter when it is (the Bell pair gives the origin).
    """
    check_qubit_index(q, n)
    # axis 1 is qubit q, axes 0 and 2 are the qubits above and below it
    pairs = np.asarray(psi).reshape(1 << q, 2, -1)
    a0, a1 = pairs[:, 0, :], pairs[:, 1, :]
    rho01 = complex(np.sum(a0 * np.conj(a1)))
    z = float(np.sum(magnitude_squared(a0)) - np.sum(magnitude_squared(a1)))
    return 2.0 * rho01.real, -2.0 * rho01.imag, z

def format_ket(psi: np.ndarray, n: int) -> str:
    """
    Dirac-notation string, e.g. "(0.7071)|00⟩ + (0.7071)|11⟩".
    Near-zero terms are dropped; an all-zero vector renders as "0".
    """
    probs = get_probabilities(psi)
    terms = []
    for i, amp in enumerate(psi):
        if probs[i] < KET_EPSILON:
            continue
        terms.append(f"({complex_to_string(amp, 4)})|{i:0{n}b}⟩")
    return " + ".join(terms) if terms else "0"

def measure(psi: np.ndarray, q: int, n: int,
            rng: Optional[np.random.Generator] = None) -> Tuple[int, np.ndarray]:
    """
    Projective measurement of qubit q in the computational basis.

    Draws the outcome from `rng` with P(1) equal to the qubit's marginal
    probability, zeroes the amplitudes that disagree with it and rescales
    the rest by 1/sqrt(P(outcome)). Returns (outcome, collapsed_state).
    """
    if rng is None:
        rng = np.random.default_rng()
    p1 = get_qubit_probability(psi, q, n)
    outcome = 1 if rng.random() < p1 else 0

    bits = (_indices(n) >> (n - 1 - q)) & 1
    out = np.where(bits == outcome, psi, 0).astype(psi.dtype)

    norm = np.sqrt(p1 if outcome == 1 else 1.0 - p1)
    if norm > NORM_EPSILON:
        out /= norm
    else:
        logger.warning("degenerate measurement on qubit %d: P(%d)=%.3g, state left unnormalised",
                       q, outcome, norm * norm)
    logger.debug("measured qubit %d -> %d (P(1)=%.6f)", q, outcome, p1)
    return outcome, freeze(out)

def norm2(psi: np.ndarray) -> float:
    return float(np.vdot(psi, psi).real)

def check_normalized(psi: np.ndarray, tol: float = 1e-9):
    n2 = norm2(psi)
    if not (abs(1.0 - n2) <= tol):
        raise NormalizationError(f"Normalization failed: ||psi||^2={n2}")
