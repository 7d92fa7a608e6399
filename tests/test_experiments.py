"""
Tests for grid_aco/experiments.py
"""

import csv

import pytest

from grid_aco import ACOConfig, ACOResult, AntSystem, MaxMinAntSystem, ackley, run_repeated_trials, run_parameter_sweep
from grid_aco.experiments import get_algorithm, summarize


@pytest.fixture
def small_cfg():
    return ACOConfig(n_ants=3, n_iterations=4, ant_steps=2, n_steps=15)


class TestRepeatedTrials:
    """Tests for run_repeated_trials."""

    def test_stats(self, small_cfg):
        stats, results = run_repeated_trials(ackley, "AS", small_cfg, n_runs=3, base_seed=10)
        assert stats["n_runs"] == 3
        assert stats["algo"] == "AS"
        assert stats["min_value"] <= stats["mean_value"] <= stats["max_value"]
        assert 1 <= stats["mean_hit_iteration"] <= small_cfg.n_iterations
        assert len(results) == 3
        assert [r.config.seed for r in results] == [10, 11, 12]
        assert results[0].best_value == pytest.approx(ackley(results[0].best_x, results[0].best_y))
        assert len(results[0].history_best_values) == small_cfg.n_iterations

    def test_base_config_untouched(self, small_cfg):
        run_repeated_trials(ackley, "AS", small_cfg, n_runs=2, base_seed=10)
        assert small_cfg.seed is None

    def test_seeded_trials_repeat(self, small_cfg):
        a, _ = run_repeated_trials(ackley, "AS", small_cfg, n_runs=2, base_seed=3)
        b, _ = run_repeated_trials(ackley, "AS", small_cfg, n_runs=2, base_seed=3)
        assert a["mean_value"] == b["mean_value"]

    def test_mmas(self, small_cfg):
        cfg = ACOConfig(n_ants=3, n_iterations=4, ant_steps=2, n_steps=15, tau_min=0.01, tau_max=5.0)
        stats, _ = run_repeated_trials(ackley, "mmas", cfg, n_runs=2)
        assert stats["n_runs"] == 2

    def test_unknown_algorithm(self, small_cfg):
        with pytest.raises(ValueError):
            run_repeated_trials(ackley, "ACS", small_cfg, n_runs=1)


class TestParameterSweep:
    """Tests for run_parameter_sweep."""

    def test_rows_and_csv(self, small_cfg, tmp_path):
        path = tmp_path / "sweep.csv"
        grid = {"alpha": [0.5, 1.0], "rho": [0.1, 0.3, 0.5]}
        rows = run_parameter_sweep(ackley, "AS", grid, base_cfg=small_cfg, n_runs=2, csv_path=str(path))
        assert len(rows) == 6
        assert {(r["alpha"], r["rho"]) for r in rows} == {(a, r) for a in (0.5, 1.0) for r in (0.1, 0.3, 0.5)}
        with open(path, newline="") as f:
            written = list(csv.DictReader(f))
        assert len(written) == 6
        assert "mean_value" in written[0]

    def test_unknown_field(self, small_cfg):
        with pytest.raises(ValueError):
            run_parameter_sweep(ackley, "AS", {"gamma": [1.0]}, base_cfg=small_cfg, n_runs=1)


class TestSummarize:
    """Tests for summarize."""

    def test_hit_iteration(self):
        cfg = ACOConfig()
        results = [
            ACOResult(0.0, 0.0, 1.0, (0, 0), [3.0, 1.0, 1.0], [3.0, 1.0, 2.0], cfg, 0.1),
            ACOResult(0.0, 0.0, 2.0, (0, 0), [2.0, 2.0, 2.0], [2.0, 4.0, 5.0], cfg, 0.3),
        ]
        stats = summarize(results, "AS")
        assert stats["mean_hit_iteration"] == pytest.approx(1.5)
        assert stats["mean_value"] == pytest.approx(1.5)
        assert stats["mean_time"] == pytest.approx(0.2)

    def test_get_algorithm(self):
        assert get_algorithm("MMAS") is MaxMinAntSystem
        assert get_algorithm("as") is AntSystem
