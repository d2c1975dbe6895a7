# jokosim/circuit.py
# A circuit is a set of gates placed at (qubits, column) positions. Columns
# are time steps: every gate in one column acts on its own qubits, and the
# columns run strictly left to right, each feeding the next.
import logging
import operator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .apply import apply_gate
from .errors import ArityMismatchError, DisjointColumnError, IndexOutOfRangeError
from .gates import MeasurementOp, get_gate
from .state import (NORM_EPSILON, check_normalized, check_qubit_count, check_qubit_index,
                    create_initial_state, format_ket, measure, norm2)

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PlacedGate:
    gate_id: str
    target_qubits: Tuple[int, ...]
    column: int

    def __post_init__(self):
        # accept lists from callers, keep the stored value immutable
        try:
            qubits = tuple(operator.index(q) for q in self.target_qubits)
        except TypeError:
            raise IndexOutOfRangeError(
                f"Gate {self.gate_id!r} has non-integer target qubits: {list(self.target_qubits)}") from None
        object.__setattr__(self, "target_qubits", qubits)

@dataclass
class Circuit:
    num_qubits: int
    gates: List[PlacedGate] = field(default_factory=list)

    @staticmethod
    def empty(n: int) -> "Circuit":
        return Circuit(n, [])

    @staticmethod
    def from_dict(d: dict) -> "Circuit":
        """Build from the {numQubits, gates: [{gateId, targetQubits, column}]} mapping."""
        gates = [PlacedGate(g["gateId"], g["targetQubits"], int(g["column"])) for g in d.get("gates", [])]
        return Circuit(int(d["numQubits"]), gates)

    def to_dict(self) -> dict:
        return {
            "numQubits": self.num_qubits,
            "gates": [{"gateId": g.gate_id, "targetQubits": list(g.target_qubits), "column": g.column}
                      for g in self.gates],
        }

    def next_column(self) -> int:
        return max((g.column for g in self.gates), default=-1) + 1

    def add(self, gate_id: str, *qubits: int, column: Optional[int] = None) -> "Circuit":
        """Place a gate; without a column it goes into a new column at the end."""
        if column is None:
            column = self.next_column()
        self.gates.append(PlacedGate(gate_id, qubits, column))
        return self

    def h(self, k:int, column=None): return self.add("H", k, column=column)
    def x(self, k:int, column=None): return self.add("X", k, column=column)
    def y(self, k:int, column=None): return self.add("Y", k, column=column)
    def z(self, k:int, column=None): return self.add("Z", k, column=column)
    def s(self, k:int, column=None): return self.add("S", k, column=column)
    def t(self, k:int, column=None): return self.add("T", k, column=column)
    def cnot(self, c:int, t:int, column=None): return self.add("CNOT", c, t, column=column)
    def swap(self, a:int, b:int, column=None): return self.add("SWAP", a, b, column=column)
    def measure(self, k:int, column=None): return self.add("M", k, column=column)

@dataclass(frozen=True)
class ExecutionStep:
    column: int
    gates_applied: Tuple[PlacedGate, ...]
    state_before: np.ndarray
    state_after: np.ndarray
    # qubit -> measured bit, only when the column measured something
    measurement_results: Optional[Mapping[int, int]] = None

# ---------------------------------------------------------------------

def get_columns(circuit: Circuit) -> List[List[PlacedGate]]:
    """
    Gates grouped by column, indexed 0..max column. Columns without gates
    stay in the list as empty lists.
    """
    if not circuit.gates:
        return []
    for g in circuit.gates:
        if g.column < 0:
            raise IndexOutOfRangeError(f"Gate {g.gate_id!r} has negative column {g.column}")
    columns: List[List[PlacedGate]] = [[] for _ in range(max(g.column for g in circuit.gates) + 1)]
    for g in circuit.gates:
        columns[g.column].append(g)
    return columns

def execute_step(psi: np.ndarray, column_gates: Sequence[PlacedGate], n: int,
                 rng: Optional[np.random.Generator] = None):
    """
    Apply one column's gates in list order.
    Returns (new_state, measurement_results or None). The results mapping is
    read-only.
    """
    used = set()
    results: Optional[Dict[int, int]] = None

    for g in column_gates:
        spec = get_gate(g.gate_id)
        if len(g.target_qubits) != spec.num_qubits:
            raise ArityMismatchError(
                f"Gate {g.gate_id!r} expects {spec.num_qubits} qubit(s), "
                f"but {len(g.target_qubits)} were provided.")
        if len(set(g.target_qubits)) != len(g.target_qubits):
            raise ArityMismatchError(f"Gate {g.gate_id!r} repeats a target qubit: {list(g.target_qubits)}")
        for q in g.target_qubits:
            check_qubit_index(q, n)
            if q in used:
                raise DisjointColumnError(f"Qubit {q} is targeted twice in column {g.column}")
            used.add(q)

        if isinstance(spec, MeasurementOp):
            (q,) = g.target_qubits
            bit, psi = measure(psi, q, n, rng=rng)
            if results is None:
                results = {}
            results[q] = bit
        else:
            psi = apply_gate(psi, spec.matrix, g.target_qubits, n)

    return psi, (MappingProxyType(results) if results is not None else None)

def execute_circuit(circuit: Circuit, rng: Optional[np.random.Generator] = None, seed=None,
                    check_norm=True, check_norm_tol=1e-9) -> List[ExecutionStep]:
    """
    Run the circuit column by column from |0...0> and return one
    ExecutionStep per column that holds gates. Empty columns are skipped.

    Fails as a whole: any error aborts the run and no steps are returned.
    """
    check_qubit_count(circuit.num_qubits)
    if rng is None:
        rng = np.random.default_rng(seed)
    n = circuit.num_qubits
    psi = create_initial_state(n)
    steps: List[ExecutionStep] = []
    # set once a measurement collapses onto a near-zero branch; stays set
    degenerate = False

    for col, column_gates in enumerate(get_columns(circuit)):
        if not column_gates:
            continue
        after, results = execute_step(psi, column_gates, n, rng=rng)
        # a degenerate collapse has already been logged by measure()
        if results is not None and norm2(after) <= NORM_EPSILON:
            degenerate = True
        if check_norm and not degenerate:
            check_normalized(after, tol=check_norm_tol)
        steps.append(ExecutionStep(col, tuple(column_gates), psi, after, results))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("column %d: %s -> %s", col, [g.gate_id for g in column_gates], format_ket(after, n))
        psi = after

    logger.info("executed %d gate(s) on %d qubit(s) in %d step(s)", len(circuit.gates), n, len(steps))
    return steps

def final_state(steps: Sequence[ExecutionStep], n: int) -> np.ndarray:
    """Last state_after, or |0...0> when nothing ran."""
    return steps[-1].state_after if steps else create_initial_state(n)
