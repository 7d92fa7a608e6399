"""
Tests for grid_aco/ant.py

Start position, weighted sampling and terminal solution of a single ant.
"""

import numpy as np
import pytest

from grid_aco import (
    AntWalker,
    AntSolution,
    DegenerateDistributionError,
    Grid,
    HeuristicField,
    PheromoneField,
    ackley,
    constant,
    weighted_choice,
)


def make_ant(objective, n_steps=3, bounds=(-1.0, 1.0), alpha=1.0, beta=1.0, seed=0, tau0=1.0):
    grid = Grid(bounds[0], bounds[1], n_steps)
    heuristic = HeuristicField(grid, objective)
    pheromone = PheromoneField(n_steps, tau0)
    return AntWalker(grid, heuristic, pheromone, objective, alpha, beta, np.random.default_rng(seed))


class TestWeightedChoice:
    """Tests for roulette-wheel sampling."""

    def test_single_nonzero_weight_always_selected(self):
        rng = np.random.default_rng(1)
        weights = np.array([0.0, 0.0, 3.0, 0.0])
        assert all(weighted_choice(weights, rng) == 2 for _ in range(500))

    def test_frequencies_follow_weights(self):
        rng = np.random.default_rng(2)
        draws = [weighted_choice(np.array([1.0, 3.0]), rng) for _ in range(4000)]
        assert np.mean(draws) == pytest.approx(0.75, abs=0.03)

    @pytest.mark.parametrize("weights", [np.zeros(4), np.array([np.inf, 1.0]), np.array([np.nan, 1.0])])
    def test_degenerate_weights(self, weights):
        with pytest.raises(DegenerateDistributionError):
            weighted_choice(weights, np.random.default_rng(0))


class TestAntWalker:
    """Tests for AntWalker."""

    def test_constant_objective_gives_uniform_distribution(self):
        ant = make_ant(constant(5.0))
        probs = ant.selection_probabilities()
        np.testing.assert_allclose(probs, np.full((3, 3), 1.0 / 9.0))

    def test_zero_steps_returns_start(self):
        ant = make_ant(constant(5.0), seed=11)
        sol = ant.run(0)
        assert isinstance(sol, AntSolution)
        assert ant.path == [sol.position]
        assert (sol.x, sol.y) == ant.grid.coordinate(*sol.position)
        assert sol.value == 5

    def test_start_is_uniform_draw_from_rng(self):
        ant = make_ant(constant(5.0), n_steps=7, seed=4)
        sol = ant.run(0)
        rng = np.random.default_rng(4)
        assert sol.position == (int(rng.integers(7)), int(rng.integers(7)))

    def test_single_nonzero_cell_selected_every_step(self):
        ant = make_ant(constant(2.0), n_steps=4, seed=5)
        ant.pheromone.tau[:] = 0.0
        ant.pheromone.tau[1, 2] = 1.0
        sol = ant.run(6)
        assert len(ant.path) == 7
        assert ant.path[1:] == [(1, 2)] * 6
        assert sol.position == (1, 2)

    def test_walk_length(self):
        ant = make_ant(ackley, n_steps=10, bounds=(-5.0, 5.0), seed=8)
        ant.run(4)
        assert len(ant.path) == 5
        assert all(0 <= i < 10 and 0 <= j < 10 for i, j in ant.path)

    def test_terminal_value_is_objective(self):
        ant = make_ant(ackley, n_steps=10, bounds=(-5.0, 5.0), seed=9)
        sol = ant.run(3)
        assert sol.value == pytest.approx(ackley(sol.x, sol.y))

    def test_weights_combine_pheromone_and_heuristic(self):
        ant = make_ant(ackley, n_steps=5, bounds=(-2.0, 2.0), alpha=2.0, beta=0.5)
        ant.pheromone.deposit((0, 3), 1.0)
        raw = ant.pheromone.values ** 2.0 * ant.heuristic.values ** 0.5
        np.testing.assert_allclose(ant.selection_probabilities(), raw / raw.sum())
        assert ant.selection_weights().max() == pytest.approx(1.0)

    def test_zero_alpha_ignores_empty_pheromone(self):
        ant = make_ant(constant(3.0), alpha=0.0)
        ant.pheromone.tau[:] = 0.0
        np.testing.assert_allclose(ant.selection_probabilities(), np.full((3, 3), 1.0 / 9.0))

    def test_large_exponents_do_not_overflow(self):
        # the origin is on this grid, so eta there is ~1e10
        ant = make_ant(ackley, n_steps=101, bounds=(-5.0, 5.0), alpha=40.0, beta=35.0, seed=1)
        ant.pheromone.deposit((50, 50), 1e10)
        probs = ant.selection_probabilities()
        assert np.all(np.isfinite(probs))
        assert probs.sum() == pytest.approx(1.0)
        sol = ant.run(2)
        assert sol.position == (50, 50)

    def test_all_zero_weights_raise(self):
        ant = make_ant(constant(1.0))
        ant.pheromone.tau[:] = 0.0
        with pytest.raises(DegenerateDistributionError):
            ant.run(1)

    def test_all_zero_weights_ignored_without_steps(self):
        ant = make_ant(constant(1.0))
        ant.pheromone.tau[:] = 0.0
        assert ant.run(0).value == 1.0
