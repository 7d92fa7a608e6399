# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from grid_aco import ACOConfig, get_objective, OBJECTIVES
from grid_aco.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def build_config(name, n_ants=10, n_iterations=50, n_steps=100, ant_steps=10, n_workers=1):
    if name == "AS":
        return ACOConfig(alpha=1.0, beta=2.0, rho=0.5, Q=1.0, tau0=1.0,
                         n_ants=n_ants, n_iterations=n_iterations,
                         n_steps=n_steps, ant_steps=ant_steps, n_workers=n_workers)
    if name == "MMAS":
        return ACOConfig(alpha=1.0, beta=2.0, rho=0.2, Q=1.0, tau0=1.0,
                         n_ants=n_ants, n_iterations=n_iterations,
                         n_steps=n_steps, ant_steps=ant_steps, n_workers=n_workers,
                         tau_min=1e-2, tau_max=10.0)
    raise ValueError(name)


def plot_scatter(details_by_algo, save_path):
    plt.figure()
    algos = list(details_by_algo.keys())
    for i, algo in enumerate(algos, start=1):
        values = [r.best_value for r in details_by_algo[algo]]
        x = np.random.normal(loc=i, scale=0.03, size=len(values))
        plt.plot(x, values, "o")
    plt.xticks(range(1, len(algos) + 1), algos)
    plt.ylabel("Best objective value")
    plt.title("Best values across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_convergence(results, algo_name, save_path):
    plt.figure()
    for r in results:
        plt.plot(r.history_best_values, alpha=0.7, label=f"seed {r.config.seed}")
    plt.xlabel("Iteration")
    plt.ylabel("Best-so-far objective value")
    plt.title(f"{algo_name} convergence")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--objective", choices=sorted(OBJECTIVES), default="ackley")
    ap.add_argument("--grid", type=int, default=100, help="grid points per axis")
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--iters", type=int, default=50)
    ap.add_argument("--ants", type=int, default=10)
    ap.add_argument("--ant-steps", type=int, default=10)
    ap.add_argument("--workers", type=int, default=1, help="threads used for the walk phase")
    ap.add_argument("--sweep", action="store_true", help="also run an alpha/beta/rho sweep for AS")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    objective = get_objective(args.objective)
    algos = ["AS", "MMAS"]
    configs = [(name, build_config(name, n_ants=args.ants, n_iterations=args.iters, n_steps=args.grid,
                                   ant_steps=args.ant_steps, n_workers=args.workers))
               for name in algos]

    # repeated trials
    records = []
    details_by_algo = {}
    for name, cfg in configs:
        stats, details = run_repeated_trials(objective, name, cfg, n_runs=args.runs)
        print(name, json.dumps(stats, indent=2))
        records.append({"algo": name, **stats})
        details_by_algo[name] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = os.path.join(OUTDIR, "results_summary.csv")
    df_summary.to_csv(summary_csv, index=False)
    scatter_png = os.path.join(OUTDIR, "results_distribution.png")
    plot_scatter(details_by_algo, scatter_png)

    # convergence plots (per algorithm), from the same runs
    for name, results in details_by_algo.items():
        conv_png = os.path.join(OUTDIR, f"convergence_{name}.png")
        plot_convergence(results, name, conv_png)

    if args.sweep:
        grid = {"alpha": [0.5, 1.0, 2.0], "beta": [1.0, 2.0, 3.0], "rho": [0.1, 0.5]}
        rows = run_parameter_sweep(
            objective, "AS", grid, base_cfg=configs[0][1],
            n_runs=3, base_seed=500, csv_path=os.path.join(OUTDIR, "as_grid.csv")
        )
        print("Grid search evaluated:", len(rows))


if __name__ == "__main__":
    main()
