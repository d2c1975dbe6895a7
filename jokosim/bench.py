# jokosim/bench.py
import argparse, csv, logging, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .circuit import Circuit, execute_circuit, get_columns

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

ONE_QUBIT = ("H", "X", "S", "T")
TWO_QUBIT = ("CNOT", "SWAP")

def warmup(circ):
    # one throwaway run so first-call overheads stay out of the timings
    _ = execute_circuit(circ, seed=0, check_norm=False)

# ---------------------------------------------------------------------

def meta_row():
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "python": platform.python_version(),
        "machine": platform.machine(),
    }

HEADER = ["qubits","depth","gates","columns","wall_ms","hostname","commit","timestamp","python","machine"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0, measure=False):
    """
    Layered circuit, one column per layer: even layers put a random
    one-qubit gate on every qubit, odd layers pair neighbours with CNOT or
    SWAP (random orientation). With measure=True the last column measures
    every qubit.
    """
    rng = np.random.default_rng(seed)
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0 or n < 2:
            for k in range(n):
                c.add(ONE_QUBIT[rng.integers(0, len(ONE_QUBIT))], k, column=layer)
        else:
            name = TWO_QUBIT[rng.integers(0, len(TWO_QUBIT))]
            for k in range(layer % 4 == 3, n-1, 2):
                if rng.integers(0, 2) == 0:
                    c.add(name, k, k+1, column=layer)
                else:
                    c.add(name, k+1, k, column=layer)
    if measure:
        for k in range(n):
            c.measure(k, column=depth)
    return c

def time_run(circ, seed=0):
    t0 = time.perf_counter()
    _ = execute_circuit(circ, seed=seed, check_norm=False)
    return (time.perf_counter() - t0) * 1e3  # ms

def _row(circ, n, depth, wall):
    m = meta_row()
    return {
        "qubits": n, "depth": depth, "gates": len(circ.gates), "columns": len(get_columns(circ)),
        "wall_ms": f"{wall:.3f}",
        **m,
    }

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, out_path):
    logger.info("qubits scaling -> %s", out_path)
    new_csv(out_path)
    did_warmup = False
    for n in ns:
        circ = random_circuit(n, depth, seed=42)
        if not did_warmup:
            warmup(circ)
            did_warmup = True
        wall = time_run(circ)
        write_row(out_path, _row(circ, n, depth, wall))
        logger.info("  n=%d  wall=%.2f ms", n, wall)

def bench_depth(n, depths, out_path):
    logger.info("depth scaling -> %s", out_path)
    new_csv(out_path)
    warmup(random_circuit(n, min(depths), seed=7))
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ)
        write_row(out_path, _row(circ, n, d, wall))
        logger.info("  depth=%d  wall=%.2f ms", d, wall)

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="jokosim benchmarks -> data/*.csv")
    p.add_argument("--out", type=str, default=DATA_DIR)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, default="1,2,4,6,8,10,12")
    p_qubits.add_argument("--depth", type=int, default=100)

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=8)
    p_depth.add_argument("--depths", type=str, default="10,50,100,300")

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        bench_qubits(ns, args.depth, os.path.join(args.out, "qubits.csv"))

    elif args.cmd == "depth":
        ds = [int(x) for x in args.depths.split(",")]
        bench_depth(args.n, ds, os.path.join(args.out, "depth.csv"))

if __name__ == "__main__":
    main()
