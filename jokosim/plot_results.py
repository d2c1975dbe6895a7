# jokosim/plot_results.py
import argparse, csv, logging, os
from collections import defaultdict
from statistics import median

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .bench import DATA_DIR

logger = logging.getLogger(__name__)

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        r = csv.DictReader(f)
        for row in r:
            row["qubits"]  = int(row["qubits"])
            row["depth"]   = int(row["depth"])
            row["gates"]   = int(row["gates"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        key = tuple(r[k] for k in key_fields)
        buckets[key].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return agg

def _line_plot(pts, x, xlabel, title, out_path, log_y=False):
    pts = sorted(pts, key=lambda r: r[x])
    fig = plt.figure()
    plt.plot([r[x] for r in pts], [r["wall_ms"] for r in pts], marker="o")
    plt.xlabel(xlabel)
    plt.ylabel("Runtime (ms, log scale)" if log_y else "Runtime (ms)")
    plt.title(title)
    if log_y:
        plt.yscale("log")
    plt.grid(True, which="both", ls="--", lw=0.5)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close(fig)
    return out_path

def plot_runtime_vs_qubits(rows, out_dir):
    pts = median_by_key(rows, ["qubits", "depth"])
    if not pts:
        return None
    depth = pts[0]["depth"]
    return _line_plot([r for r in pts if r["depth"] == depth], "qubits", "Qubits (n)",
                      f"Runtime vs Qubits [depth={depth}]",
                      os.path.join(out_dir, "runtime_vs_qubits.png"), log_y=True)

def plot_runtime_vs_depth(rows, out_dir):
    pts = median_by_key(rows, ["qubits", "depth"])
    if not pts:
        return None
    n = pts[0]["qubits"]
    return _line_plot([r for r in pts if r["qubits"] == n], "depth", "Depth",
                      f"Runtime vs Depth [n={n}]",
                      os.path.join(out_dir, "runtime_vs_depth.png"))

def main(argv=None):
    p = argparse.ArgumentParser(description="Plot jokosim benchmark CSVs")
    p.add_argument("--data", type=str, default=DATA_DIR)
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    plotters = {"qubits": plot_runtime_vs_qubits, "depth": plot_runtime_vs_depth}
    saved = []
    for tag, plot in plotters.items():
        path = os.path.join(args.data, f"{tag}.csv")
        if not os.path.exists(path):
            continue
        rows = load_rows(path)
        logger.info("Plotting from %s.csv (%d rows)...", tag, len(rows))
        out = plot(rows, args.data)
        if out:
            saved.append(out)

    if not saved:
        logger.warning("No benchmark CSVs found under %s", args.data)
        return
    logger.info("Saved %s", ", ".join(saved))

if __name__ == "__main__":
    main()
