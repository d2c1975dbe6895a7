import numpy as np
from jokosim.circuit import Circuit, execute_circuit, final_state
from jokosim.state import format_ket

def almost(p, q, tol=1e-9):
    return np.allclose(p, q, atol=tol, rtol=0)

def probs(psi):
    return np.abs(psi)**2

def run(c):
    return final_state(execute_circuit(c, seed=0), c.num_qubits)

def test_h_on_zero():
    psi = run(Circuit.empty(1).h(0))
    assert almost(probs(psi), [0.5, 0.5])
    assert almost(psi, [np.sqrt(0.5), np.sqrt(0.5)])

def test_x_flips():
    # |0> -> X -> |1>
    psi = run(Circuit.empty(1).x(0))
    assert almost(probs(psi), [0.0, 1.0])

def test_cnot_control_off_noop():
    # |00> --(CNOT c=1,t=0)--> stays |00>
    psi = run(Circuit.empty(2).cnot(1, 0))
    expect = np.zeros(4); expect[0] = 1.0
    assert almost(probs(psi), expect)

def test_cnot_control_on_flips():
    # X on qubit 1 gives |01>; CNOT(1->0) flips qubit 0: |01> -> |11>
    psi = run(Circuit.empty(2).x(1).cnot(1, 0))
    expect = np.zeros(4); expect[3] = 1.0
    assert almost(probs(psi), expect)

def test_bell_state():
    c = Circuit.empty(2).h(0, column=0).cnot(0, 1, column=1)
    psi = run(c)
    s = 1 / np.sqrt(2)
    assert almost(psi, [s, 0, 0, s])
    ket = format_ket(psi, 2)
    assert "|00⟩" in ket and "|11⟩" in ket
    assert "|01⟩" not in ket and "|10⟩" not in ket

def test_ghz_state():
    c = Circuit.empty(3).h(0, column=0).cnot(0, 1, column=1).cnot(0, 2, column=2)
    psi = run(c)
    expect = np.zeros(8); expect[0] = expect[7] = 0.7071067811865476
    assert almost(psi, expect)

def test_double_hadamard_returns_to_zero():
    steps = execute_circuit(Circuit.empty(1).h(0, column=0).h(0, column=1))
    assert almost(probs(steps[0].state_after), [0.5, 0.5])
    assert almost(steps[1].state_after, [1, 0])

def test_swap_moves_excitation():
    # |10> -> SWAP -> |01>
    psi = run(Circuit.empty(2).x(0).swap(0, 1))
    assert almost(psi, [0, 1, 0, 0])

def test_normalization():
    c = Circuit.empty(2).h(0).h(1).cnot(1, 0).t(0).y(1).s(0)
    psi = run(c)
    n2 = float((psi.conj()*psi).sum().real)
    assert abs(1.0 - n2) < 1e-9
