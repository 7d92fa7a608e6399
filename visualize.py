import os, argparse, logging
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from grid_aco import ACOConfig, AntSystem, MaxMinAntSystem, get_objective, OBJECTIVES

ALGO_MAP = {"AS": AntSystem, "MMAS": MaxMinAntSystem}

def build_config(algo, n_ants=10, n_iterations=50, n_steps=100, ant_steps=10, seed=None):
    if algo == "AS":
        return ACOConfig(alpha=1.0, beta=2.0, rho=0.5, Q=1.0, tau0=1.0, n_ants=n_ants,
                         n_iterations=n_iterations, n_steps=n_steps, ant_steps=ant_steps, seed=seed)
    if algo == "MMAS":
        return ACOConfig(alpha=1.0, beta=2.0, rho=0.2, Q=1.0, tau0=1.0, n_ants=n_ants,
                         n_iterations=n_iterations, n_steps=n_steps, ant_steps=ant_steps,
                         tau_min=1e-2, tau_max=10.0, seed=seed)
    raise ValueError("Unsupported algo")

def plot_surface(solver, result, save_path):
    """Objective surface over the grid with the global best marked."""
    X, Y = solver.grid.mesh()
    Z = solver.heuristic.costs
    fig = plt.figure(figsize=(11, 5))
    ax3d = fig.add_subplot(1, 2, 1, projection="3d")
    ax3d.plot_surface(X, Y, Z, cmap="viridis", linewidth=0, alpha=0.8)
    ax3d.scatter([result.best_x], [result.best_y], [result.best_value], color="red", s=40)
    ax3d.set_xlabel("x"); ax3d.set_ylabel("y"); ax3d.set_zlabel("f(x, y)")

    ax = fig.add_subplot(1, 2, 2)
    cs = ax.contourf(X, Y, Z, levels=40, cmap="viridis")
    fig.colorbar(cs, ax=ax)
    ax.plot(result.best_x, result.best_y, "r*", markersize=14)
    ax.set_title(f"best f({result.best_x:.3f}, {result.best_y:.3f}) = {result.best_value:.4g}")
    ax.set_aspect("equal", adjustable="box")
    fig.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)

def make_pheromone_gif(solver, algo_name, outdir, step=5):
    lo, hi = solver.grid.bounds
    frames = []
    iters = list(range(0, len(solver.history_pheromone), step))
    for it in iters:
        tau = solver.history_pheromone[it]
        bi, bj = solver.history_best_positions[it]
        bx, by = solver.grid.coordinate(bi, bj)

        plt.figure(figsize=(5, 5))
        # transpose: rows of tau follow x, imshow rows follow y
        plt.imshow(np.log10(tau.T + 1e-12), origin="lower", extent=(lo, hi, lo, hi), cmap="magma")
        plt.colorbar(label="log10 pheromone")
        plt.plot(bx, by, "c*", markersize=12)
        plt.title(f"{algo_name} pheromone\niter={it+1}  best={solver.history_best_values[it]:.4g}")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"{algo_name}_frame_{it:03d}.png")
        plt.savefig(frame_path, dpi=100, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, f"{algo_name}_pheromone.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))
    return gif_path

def visualize(objective, algo_name, cfg, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    cfg.record_pheromone = True
    solver = ALGO_MAP[algo_name](objective, cfg)
    result = solver.run()

    surface_png = os.path.join(outdir, f"{algo_name}_surface.png")
    plot_surface(solver, result, surface_png)
    print("Saved:", surface_png)
    gif_path = make_pheromone_gif(solver, algo_name, outdir, step=step)
    print("Saved:", gif_path)
    return result

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["AS", "MMAS"], default="AS")
    p.add_argument("--objective", choices=sorted(OBJECTIVES), default="ackley")
    p.add_argument("--iters", type=int, default=50)
    p.add_argument("--ants", type=int, default=10)
    p.add_argument("--grid", type=int, default=100, help="grid points per axis")
    p.add_argument("--ant-steps", type=int, default=10)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    cfg = build_config(args.algo, n_ants=args.ants, n_iterations=args.iters, n_steps=args.grid,
                       ant_steps=args.ant_steps, seed=args.seed)
    res = visualize(get_objective(args.objective), args.algo, cfg, args.outdir, step=args.step)
    print(f"Best: x={res.best_x:.6f} y={res.best_y:.6f} f={res.best_value:.6g}")

if __name__ == "__main__":
    main()
