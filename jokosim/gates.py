# jokosim/gates.py
# Gate matrices and the fixed gate catalogue.
#
# Matrices are row-major and big-endian on their own qubits: for a
# two-qubit gate placed on [a, b], qubit a is the high bit of the
# 00,01,10,11 ordering. For CNOT that makes a the control.
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

import numpy as np

from .complexmath import from_polar
from .errors import UnknownGateError

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return np.array([[s, s],
                     [s, -s]], dtype=dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=dtype)

def Y(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, -1j],
                     [1j, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=dtype)

def S(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, 1j]], dtype=dtype)

def T(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, from_polar(1.0, np.pi / 4)]], dtype=dtype)

def CNOT(dtype=np.complex128) -> np.ndarray:
    # order 00,01,10,11 as (control, target)
    mat = np.eye(4, dtype=dtype)
    # swap |10> <-> |11>
    mat[2,2] = 0; mat[3,3] = 0
    mat[2,3] = 1; mat[3,2] = 1
    return mat

def SWAP(dtype=np.complex128) -> np.ndarray:
    mat = np.eye(4, dtype=dtype)
    # swap |01> <-> |10>
    mat[1,1] = 0; mat[2,2] = 0
    mat[1,2] = 1; mat[2,1] = 1
    return mat

def is_unitary(U: np.ndarray, tol: float = 1e-9) -> bool:
    U = np.asarray(U)
    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        return False
    return np.allclose(U.conj().T @ U, np.eye(U.shape[0]), atol=tol, rtol=0)

# ----------------------------- catalogue -----------------------------

class GateId(str, Enum):
    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    S = "S"
    T = "T"
    CNOT = "CNOT"
    SWAP = "SWAP"
    M = "M"

@dataclass(frozen=True, eq=False)
class UnitaryGate:
    name: str
    symbol: str
    matrix: np.ndarray
    description: str = ""
    detailed_description: str = ""

    @property
    def num_qubits(self) -> int:
        return int(self.matrix.shape[0]).bit_length() - 1

@dataclass(frozen=True)
class MeasurementOp:
    name: str
    symbol: str
    description: str = ""
    detailed_description: str = ""
    num_qubits: int = 1

GateSpec = Union[UnitaryGate, MeasurementOp]

def _frozen(U: np.ndarray) -> np.ndarray:
    U.flags.writeable = False
    return U

GATES: Dict[GateId, GateSpec] = {
    GateId.H: UnitaryGate(
        "H", "H", _frozen(H()),
        "Hadamard: puts a qubit into an equal superposition of |0⟩ and |1⟩.",
        "Maps |0⟩ to (|0⟩+|1⟩)/√2 and |1⟩ to (|0⟩-|1⟩)/√2. "
        "Applying it twice returns the qubit to where it started (H² = I)."),
    GateId.X: UnitaryGate(
        "X", "X", _frozen(X()),
        "Pauli-X (NOT): flips |0⟩ to |1⟩ and back.",
        "The quantum analogue of a classical NOT; a 180° turn about the "
        "X axis of the Bloch sphere that swaps the |0⟩ and |1⟩ amplitudes."),
    GateId.Y: UnitaryGate(
        "Y", "Y", _frozen(Y()),
        "Pauli-Y: bit-flip combined with a phase.",
        "A 180° turn about the Y axis. Maps |0⟩ to i|1⟩ and |1⟩ to -i|0⟩."),
    GateId.Z: UnitaryGate(
        "Z", "Z", _frozen(Z()),
        "Pauli-Z (phase flip): leaves |0⟩ alone and negates |1⟩.",
        "A 180° turn about the Z axis. Z = HXH."),
    GateId.S: UnitaryGate(
        "S", "S", _frozen(S()),
        "S (phase): 90° phase on |1⟩.",
        "The square root of Z (S² = Z); multiplies the |1⟩ amplitude by i."),
    GateId.T: UnitaryGate(
        "T", "T", _frozen(T()),
        "T: 45° (π/4) phase on |1⟩.",
        "The fourth root of Z (T⁴ = Z, T² = S); multiplies |1⟩ by e^(iπ/4)."),
    GateId.CNOT: UnitaryGate(
        "CNOT", "⊕", _frozen(CNOT()),
        "CNOT: flips the target qubit when the control qubit is |1⟩.",
        "Targets are [control, target]. With a Hadamard in front it turns "
        "|00⟩ into the Bell state (|00⟩+|11⟩)/√2."),
    GateId.SWAP: UnitaryGate(
        "SWAP", "×", _frozen(SWAP()),
        "SWAP: exchanges the states of two qubits.",
        "Equivalent to three CNOTs; used to route qubit states."),
    GateId.M: MeasurementOp(
        "M", "M",
        "Measure: collapses the qubit to |0⟩ or |1⟩ at random.",
        "Projects onto the computational basis with P(1) = the qubit's "
        "marginal |1⟩ probability. Not unitary."),
}

def get_gate(gate_id) -> GateSpec:
    try:
        return GATES[GateId(gate_id)]
    except ValueError:
        raise UnknownGateError(gate_id) from None
