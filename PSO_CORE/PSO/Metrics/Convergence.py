# File: PSO_CORE/PSO/Metrics/Convergence.py
# Stopping rule for hosts that tick until the swarm settles.

import collections
from pathlib import Path

import numpy as np

from PSO_CORE import CONFIG
from PSO_CORE.Logs.logger import log_debug

module_name = Path(__file__).stem


class ConvergenceTracker:
    """
    Declares convergence when both hold:
      * the global best improved by less than `threshold_gbest` over the
        last `patience` updates, for `patience` consecutive updates;
      * the std dev of finite personal-best values is below
        `threshold_pbest_std`.
    """

    def __init__(self, patience: int = CONFIG.CONVERGENCE_PATIENCE,
                 threshold_gbest: float = CONFIG.CONVERGENCE_THRESHOLD_GBEST,
                 threshold_pbest_std: float = CONFIG.CONVERGENCE_THRESHOLD_PBEST_STD):
        if patience < 1:
            raise ValueError(f"patience must be at least 1, got {patience}")
        self.patience = patience
        self.threshold_gbest = threshold_gbest
        self.threshold_pbest_std = threshold_pbest_std
        self._gbest_history = collections.deque(maxlen=patience)
        self._stagnation_counter = 0

    def reset(self):
        self._gbest_history.clear()
        self._stagnation_counter = 0
        log_debug("Convergence tracking reset.", module_name)

    @property
    def stagnation_counter(self) -> int:
        return self._stagnation_counter

    def update(self, swarm) -> bool:
        """Records the swarm's current bests; returns True once converged."""
        gbest_value = swarm.global_best_value()
        self._gbest_history.append(gbest_value)

        # 1. GBest stagnation
        gbest_stagnated = False
        if len(self._gbest_history) == self.patience:
            finite_history = [v for v in self._gbest_history if np.isfinite(v)]
            if finite_history and np.isfinite(gbest_value):
                improvement = finite_history[0] - gbest_value
                if self.threshold_gbest > improvement >= 0:
                    self._stagnation_counter += 1
                else:
                    self._stagnation_counter = 0
            else:
                self._stagnation_counter = 0

            gbest_stagnated = self._stagnation_counter >= self.patience
        else:
            self._stagnation_counter = 0

        # 2. Diversity of personal-best values
        pbest_values = swarm.personal_best_values()
        finite_pbest = pbest_values[np.isfinite(pbest_values)]
        if len(finite_pbest) < 2:
            diversity_low = gbest_stagnated
        else:
            diversity_low = np.std(finite_pbest) < self.threshold_pbest_std

        if gbest_stagnated and diversity_low:
            log_debug(f"Convergence detected at iteration {swarm.iteration} "
                      f"(stagnant for {self._stagnation_counter} updates).", module_name)
            return True
        return False
