# jokosim/errors.py
# All errors raised by the simulator. Each one also derives from the builtin
# exception a caller would naturally catch for that kind of mistake.


class SimulatorError(Exception):
    pass


class UnknownGateError(SimulatorError, KeyError):
    def __init__(self, gate_id):
        self.gate_id = gate_id
        super().__init__(f"Unknown gate: {gate_id!r}")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class ArityMismatchError(SimulatorError, ValueError):
    pass


class IndexOutOfRangeError(SimulatorError, IndexError):
    pass


class InvalidQubitCountError(SimulatorError, ValueError):
    pass


class DisjointColumnError(SimulatorError, ValueError):
    """Two gates in one column address the same qubit."""


class NormalizationError(SimulatorError, ArithmeticError):
    pass
