# jokosim/presets.py
# Example circuits from the lessons, kept in the same
# {numQubits, gates: [{gateId, targetQubits, column}]} shape the lesson
# content uses.
from typing import Dict

from .circuit import Circuit

def _g(gate_id, targets, column):
    return {"gateId": gate_id, "targetQubits": list(targets), "column": column}

def _superdense(encode):
    # Bell pair, Alice's encoding on qubit 0 from column 2, then Bob decodes
    gates = [_g("H", [0], 0), _g("CNOT", [0, 1], 1)]
    col = 2
    for gate_id in encode:
        gates.append(_g(gate_id, [0], col))
        col += 1
    gates += [_g("CNOT", [0, 1], col), _g("H", [0], col + 1),
              _g("M", [0], col + 2), _g("M", [1], col + 2)]
    return {"numQubits": 2, "gates": gates}

def _deutsch(oracle):
    gates = [_g("X", [1], 0), _g("H", [0], 1), _g("H", [1], 1)]
    gates += [_g(gate_id, targets, 2) for gate_id, targets in oracle]
    gates += [_g("H", [0], 3), _g("M", [0], 4)]
    return {"numQubits": 2, "gates": gates}

PRESETS: Dict[str, dict] = {
    "superposition": {"numQubits": 1, "gates": [_g("H", [0], 0)]},
    "double_hadamard": {"numQubits": 1, "gates": [_g("H", [0], 0), _g("H", [0], 1)]},
    "phase_flip": {"numQubits": 1, "gates": [_g("H", [0], 0), _g("S", [0], 1),
                                             _g("S", [0], 2), _g("H", [0], 3)]},
    "measure_plus": {"numQubits": 1, "gates": [_g("H", [0], 0), _g("M", [0], 1)]},
    "bell": {"numQubits": 2, "gates": [_g("H", [0], 0), _g("CNOT", [0, 1], 1)]},
    "ghz": {"numQubits": 3, "gates": [_g("H", [0], 0), _g("CNOT", [0, 1], 1),
                                      _g("CNOT", [0, 2], 2)]},
    "teleportation_setup": {"numQubits": 3, "gates": [_g("H", [1], 0), _g("CNOT", [1, 2], 1),
                                                      _g("CNOT", [0, 1], 2), _g("H", [0], 3)]},
    "superdense_00": _superdense([]),
    "superdense_01": _superdense(["X"]),
    "superdense_10": _superdense(["Z"]),
    "superdense_11": _superdense(["X", "Z"]),
    "deutsch_constant": _deutsch([]),
    "deutsch_balanced": _deutsch([("CNOT", [0, 1])]),
}

def load_preset(name: str) -> Circuit:
    try:
        d = PRESETS[name]
    except KeyError:
        raise KeyError(f"unknown preset {name!r}; known: {', '.join(sorted(PRESETS))}") from None
    return Circuit.from_dict(d)
