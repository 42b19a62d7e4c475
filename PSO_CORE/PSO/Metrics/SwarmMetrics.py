# File: PSO_CORE/PSO/Metrics/SwarmMetrics.py
# Read-only diagnostics over a SwarmState. Nothing here mutates the swarm;
# positions are read through the accessor and reshaped to (size, dim).

from pathlib import Path

import numpy as np

from PSO_CORE.Logs.logger import log_debug, log_warning

module_name = Path(__file__).stem


def poli_stable(w: float, cp: float, cg: float) -> bool:
    """
    Poli's order-2 stability region: -1 <= w <= 1 and
    cp + cg < 24 (1 - w^2) / (7 - 5 w).
    """
    if not (-1.0 <= w <= 1.0):
        return False
    denominator = 7.0 - 5.0 * w
    if np.isclose(denominator, 0):
        return False
    return (cp + cg) < 24.0 * (1.0 - w ** 2) / denominator


class SwarmMetrics:
    """
    Per-tick swarm metrics. Keeps the previous positions it saw so the
    average step size can be reported on the following call.
    """

    def __init__(self):
        self.previous_positions = None

    def reset(self):
        self.previous_positions = None

    def compute(self, swarm) -> dict:
        positions = np.array(swarm.positions()).reshape(swarm.size, swarm.dim)
        velocities = np.asarray(swarm.velocities()).reshape(swarm.size, swarm.dim)

        metrics = {
            'iteration': swarm.iteration,
            'gbest_value': swarm.global_best_value(),
            'mean_pbest_value': float(np.mean(swarm.personal_best_values())),
            'avg_velocity_magnitude': float(np.mean(np.linalg.norm(velocities, axis=1))),
            'avg_step_size': np.nan,
            'swarm_diversity': np.nan,
            'infeasible_ratio': np.nan,
            'poli_stable': poli_stable(swarm.w, swarm.cp, swarm.cg),
        }

        if self.previous_positions is not None and self.previous_positions.shape == positions.shape:
            metrics['avg_step_size'] = float(np.mean(np.linalg.norm(positions - self.previous_positions, axis=1)))

        if np.isnan(positions).any():
            log_warning("NaN values detected in positions. Diversity and infeasible ratio left as NaN.", module_name)
        else:
            if swarm.size == 1:
                metrics['swarm_diversity'] = 0.0
            else:
                centroid = np.mean(positions, axis=0)
                metrics['swarm_diversity'] = float(np.mean(np.linalg.norm(positions - centroid, axis=1)))

            out_of_bounds = np.any((positions < swarm.lower) | (positions > swarm.upper), axis=1)
            metrics['infeasible_ratio'] = float(np.sum(out_of_bounds)) / swarm.size

        self.previous_positions = positions
        log_debug(f"Computed metrics: {metrics}", module_name)
        return metrics
