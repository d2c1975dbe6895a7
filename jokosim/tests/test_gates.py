import numpy as np
import pytest
from jokosim import gates as G
from jokosim.apply import apply_gate
from jokosim.errors import UnknownGateError
from jokosim.gates import GATES, GateId, MeasurementOp, UnitaryGate, get_gate, is_unitary
from jokosim.state import create_initial_state

def basis(n, i):
    psi = np.zeros(1 << n, dtype=np.complex128); psi[i] = 1
    return psi

def test_catalogue_has_every_gate():
    assert {g.value for g in GATES} == {"H","X","Y","Z","S","T","CNOT","SWAP","M"}

def test_unitaries_are_unitary():
    for gid, spec in GATES.items():
        if isinstance(spec, UnitaryGate):
            U = spec.matrix
            assert np.allclose(U.conj().T @ U, np.eye(U.shape[0]), atol=1e-9, rtol=0), gid
            assert is_unitary(U)

def test_arity():
    arity = {gid.value: spec.num_qubits for gid, spec in GATES.items()}
    assert arity == {"H":1,"X":1,"Y":1,"Z":1,"S":1,"T":1,"CNOT":2,"SWAP":2,"M":1}

def test_measurement_is_not_a_matrix():
    m = get_gate("M")
    assert isinstance(m, MeasurementOp)
    assert not hasattr(m, "matrix")

def test_catalogue_matrices_are_read_only():
    with pytest.raises(ValueError):
        GATES[GateId.H].matrix[0, 0] = 0

def test_get_gate_accepts_enum_and_string():
    assert get_gate(GateId.CNOT) is get_gate("CNOT")

def test_unknown_gate():
    with pytest.raises(UnknownGateError) as e:
        get_gate("CX")
    assert "CX" in str(e.value)
    # also a KeyError for callers that treat the catalogue like a dict
    with pytest.raises(KeyError):
        get_gate("toffoli")

def test_is_unitary_rejects():
    assert not is_unitary(np.array([[1, 1], [0, 1]]))
    assert not is_unitary(np.ones((2, 3)))

def test_involutions_on_basis_states():
    for i in range(2):
        psi = basis(1, i)
        hh = apply_gate(apply_gate(psi, G.H(), [0], 1), G.H(), [0], 1)
        assert np.allclose(hh, psi, atol=1e-9)
        ss = apply_gate(apply_gate(psi, G.S(), [0], 1), G.S(), [0], 1)
        assert np.allclose(ss, G.Z() @ psi, atol=1e-9)
        t4 = psi
        for _ in range(4):
            t4 = apply_gate(t4, G.T(), [0], 1)
        assert np.allclose(t4, G.Z() @ psi, atol=1e-9)
    for i in range(4):
        psi = basis(2, i)
        sw = apply_gate(apply_gate(psi, G.SWAP(), [0, 1], 2), G.SWAP(), [0, 1], 2)
        assert np.allclose(sw, psi, atol=1e-9)

def test_y_and_z_action():
    one = apply_gate(create_initial_state(1), G.X(), [0], 1)
    assert np.allclose(apply_gate(one, G.Z(), [0], 1), [0, -1])
    assert np.allclose(apply_gate(one, G.Y(), [0], 1), [-1j, 0])
    assert np.allclose(apply_gate(create_initial_state(1), G.Y(), [0], 1), [0, 1j])

def test_t_phase():
    one = apply_gate(create_initial_state(1), G.X(), [0], 1)
    out = apply_gate(one, G.T(), [0], 1)
    assert np.isclose(out[1], np.exp(1j * np.pi / 4))
    assert np.isclose(abs(out[1]), 1.0)
