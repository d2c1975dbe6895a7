# jokosim: step-by-step quantum state-vector simulator
from .complexmath import (ZERO, ONE, I, add, subtract, multiply, scale, conjugate,
                          magnitude, magnitude_squared, from_polar, complex_to_string)
from .errors import (SimulatorError, UnknownGateError, ArityMismatchError, IndexOutOfRangeError,
                     InvalidQubitCountError, DisjointColumnError, NormalizationError)
from .gates import GATES, GateId, GateSpec, UnitaryGate, MeasurementOp, get_gate, is_unitary
from .state import (MAX_QUBITS, create_initial_state, get_probabilities, get_qubit_probability,
                    format_ket, measure, norm2, check_normalized, bloch_vector)
from .apply import apply_gate
from .circuit import (PlacedGate, Circuit, ExecutionStep, get_columns, execute_step,
                      execute_circuit, final_state)
from .presets import PRESETS, load_preset

__version__ = "0.1.0"
