# jokosim/trace.py
# Step through a preset circuit and print the state after every column.
#   python -m jokosim.trace bell
#   python -m jokosim.trace measure_plus --seed 3 -v
import argparse
import logging
import sys

from .circuit import execute_circuit
from .errors import SimulatorError
from .presets import PRESETS, load_preset
from .state import create_initial_state, format_ket

logger = logging.getLogger(__name__)

def describe_gate(g) -> str:
    return f"{g.gate_id}{list(g.target_qubits)}"

def trace(name: str, seed=None, out=None):
    if out is None:
        out = sys.stdout
    circ = load_preset(name)
    n = circ.num_qubits
    steps = execute_circuit(circ, seed=seed)
    print(f"{name}: {n} qubit(s), {len(circ.gates)} gate(s)", file=out)
    print(f"  start     {format_ket(create_initial_state(n), n)}", file=out)
    for st in steps:
        gates = " ".join(describe_gate(g) for g in st.gates_applied)
        line = f"  col {st.column:<3}  {gates}  ->  {format_ket(st.state_after, n)}"
        if st.measurement_results:
            bits = ", ".join(f"q{q}={b}" for q, b in sorted(st.measurement_results.items()))
            line += f"   [measured {bits}]"
        print(line, file=out)
    return steps

def main(argv=None):
    p = argparse.ArgumentParser(description="Run a preset circuit and print each step's ket.")
    p.add_argument("preset", nargs="?", help="preset name (see --list)")
    p.add_argument("--seed", type=int, default=None, help="seed for measurement outcomes")
    p.add_argument("--list", action="store_true", help="list presets and exit")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        for name in sorted(PRESETS):
            print(name)
        return 0
    if not args.preset:
        p.error("a preset name is required (or --list)")
    if args.preset not in PRESETS:
        p.error(f"unknown preset {args.preset!r}; try --list")

    try:
        trace(args.preset, seed=args.seed)
    except SimulatorError as e:
        logger.error("%s", e)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
