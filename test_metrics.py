#!/usr/bin/env python3
"""
Tests for swarm metrics and convergence detection.
"""

import numpy as np
import pytest

from PSO_CORE.Logs.logger import log_header, log_info
from PSO_CORE.PSO.Metrics.Convergence import ConvergenceTracker
from PSO_CORE.PSO.Metrics.SwarmMetrics import SwarmMetrics, poli_stable
from PSO_CORE.PSO.RandomSource import ConstantRandomSource, NumpyRandomSource
from PSO_CORE.PSO.Swarm import create_swarm

LOWER, UPPER = -5.12, 5.12


def make_swarm(seed=0, dim=2, size=10, w=0.7, cp=0.8, cg=0.8):
    return create_swarm(LOWER, UPPER, dim, size, w, cp, cg, random_source=NumpyRandomSource(seed))


def test_metrics_keys_and_values():
    log_header("=== Metrics Test ===", "test_metrics")
    swarm = make_swarm()
    metrics = SwarmMetrics().compute(swarm)

    for key, value in metrics.items():
        log_info(f"  {key}: {value}", "test_metrics")

    assert metrics['iteration'] == 0
    assert metrics['gbest_value'] == pytest.approx(swarm.global_best_value())
    assert metrics['mean_pbest_value'] >= metrics['gbest_value']
    assert metrics['avg_velocity_magnitude'] > 0
    assert metrics['swarm_diversity'] > 0
    assert metrics['infeasible_ratio'] == 0.0
    assert np.isnan(metrics['avg_step_size'])


def test_step_size_reported_after_tick():
    swarm = make_swarm()
    calculator = SwarmMetrics()
    before = np.array(swarm.positions()).reshape(swarm.size, swarm.dim)
    calculator.compute(swarm)

    swarm.tick()
    metrics = calculator.compute(swarm)
    after = np.array(swarm.positions()).reshape(swarm.size, swarm.dim)
    expected = np.mean(np.linalg.norm(after - before, axis=1))
    assert metrics['avg_step_size'] == pytest.approx(expected)
    assert metrics['iteration'] == 1

    calculator.reset()
    assert np.isnan(calculator.compute(swarm)['avg_step_size'])


def test_infeasible_ratio_counts_particles_outside_bounds():
    swarm = make_swarm(size=4)
    swarm.x[0] = 10.0  # particle 0, first coordinate
    swarm.x[7] = -10.0  # particle 3, second coordinate
    metrics = SwarmMetrics().compute(swarm)
    assert metrics['infeasible_ratio'] == pytest.approx(0.5)


def test_single_particle_diversity_is_zero():
    swarm = make_swarm(size=1)
    assert SwarmMetrics().compute(swarm)['swarm_diversity'] == 0.0


def test_nan_positions_leave_diversity_undefined():
    swarm = make_swarm(size=3)
    swarm.x[0] = np.nan
    with np.errstate(invalid='ignore'):
        metrics = SwarmMetrics().compute(swarm)
    assert np.isnan(metrics['swarm_diversity'])
    assert np.isnan(metrics['infeasible_ratio'])


def test_poli_stability_region():
    assert poli_stable(0.7, 1.5, 1.5)
    assert not poli_stable(0.7, 2.0, 2.0)
    assert not poli_stable(1.2, 0.5, 0.5)
    assert not poli_stable(-1.5, 0.1, 0.1)


def test_metrics_report_stability_of_swarm_parameters():
    assert SwarmMetrics().compute(make_swarm(w=0.7, cp=0.8, cg=0.8))['poli_stable']


def test_converges_once_global_best_stagnates():
    # Every draw is zero: the lone particle sits at the origin and never moves
    swarm = create_swarm(LOWER, UPPER, 2, 1, 0.7, 0.8, 0.8, random_source=ConstantRandomSource(0.0))
    tracker = ConvergenceTracker(patience=3, threshold_gbest=1e-8, threshold_pbest_std=1e-6)

    results = []
    for _ in range(6):
        swarm.tick()
        results.append(tracker.update(swarm))
    # History fills on update 3; the stagnation counter then needs 3 more updates
    assert results == [False, False, False, False, True, True]
    assert tracker.stagnation_counter >= 3


def test_spread_out_swarm_does_not_converge():
    swarm = make_swarm(size=10)
    swarm.random_source = ConstantRandomSource(0.0)
    tracker = ConvergenceTracker(patience=2)
    assert not any(tracker.update(swarm) for _ in range(10))


def test_reset_clears_history():
    swarm = make_swarm(size=1)
    tracker = ConvergenceTracker(patience=2)
    for _ in range(5):
        tracker.update(swarm)
    tracker.reset()
    assert tracker.stagnation_counter == 0
    assert not tracker.update(swarm)


def test_patience_must_be_positive():
    with pytest.raises(ValueError):
        ConvergenceTracker(patience=0)
