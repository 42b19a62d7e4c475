# File: PSO_CORE/PSO/Swarm.py
# Flat-array particle swarm minimizing the Rastrigin function.
# Particles are updated one after another and the global best is replaced
# in place, so a particle can be pulled toward a best found earlier in the
# same tick.

import numbers
from pathlib import Path

import numpy as np

from PSO_CORE.Logs.logger import log_info, log_error, log_warning, log_debug
from PSO_CORE.Notify.Notifier import LogNotifier
from PSO_CORE.PSO.Errors import InvalidConfiguration, NumericOverflow
from PSO_CORE.PSO.ObjectiveFunctions.Rastrigin import rastrigin
from PSO_CORE.PSO.RandomSource import NumpyRandomSource

# --- Module Name for Logging ---
module_name = Path(__file__).stem


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class SwarmState:
    """
    Particle swarm stored particle-major in flat arrays.

    Attributes:
        size (int): Number of particles.
        dim (int): Dimensionality of the search space.
        x (np.ndarray): Positions, shape (size * dim,). Particle i owns x[i*dim:(i+1)*dim].
        v (np.ndarray): Velocities, same layout as x.
        p (np.ndarray): Personal best positions, same layout as x.
        g (np.ndarray): Global best position, shape (dim,).
        w, cp, cg (float): Inertia, personal-best and global-best coefficients.
        iteration (int): Number of completed ticks.
    """

    def __init__(self, lower: float, upper: float, dim: int, size: int,
                 w: float, cp: float, cg: float,
                 random_source=None, notifier=None):
        self._validate(lower, upper, dim, size)

        self.lower = float(lower)
        self.upper = float(upper)
        self.dim = int(dim)
        self.size = int(size)
        self.w = w
        self.cp = cp
        self.cg = cg
        self.random_source = random_source if random_source is not None else NumpyRandomSource()
        self.notifier = notifier if notifier is not None else LogNotifier()
        self.iteration = 0

        n = self.size * self.dim
        span = self.upper - self.lower

        # --- Initialize Swarm State ---
        # All positions are drawn before any velocity
        self.x = np.asarray(self.random_source.uniform_inclusive(self.lower, self.upper, n), dtype=float)
        self.v = np.asarray(self.random_source.uniform_inclusive(-span, span, n), dtype=float)
        self.p = self.x.copy()

        # Earliest particle wins ties
        self.g = self.x[0:self.dim].copy()
        for i in range(self.size):
            candidate = self.x[self._slice(i)]
            if rastrigin(candidate) < rastrigin(self.g):
                self.g = candidate.copy()

        log_info(f"Initialized swarm: {self.size} particles, {self.dim} dimensions, "
                 f"bounds [{self.lower}, {self.upper}], w={w}, cp={cp}, cg={cg}.", module_name)
        log_info(f"Initial GBest Value: {self.global_best_value():.4e}", module_name)

    @staticmethod
    def _validate(lower, upper, dim, size):
        problems = []
        if not (np.isfinite(lower) and np.isfinite(upper)):
            problems.append(f"bounds must be finite, got [{lower}, {upper}]")
        elif lower >= upper:
            problems.append(f"lower ({lower}) must be strictly less than upper ({upper})")
        for name, value in (("dim", dim), ("size", size)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                problems.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                problems.append(f"{name} must be positive, got {value}")

        if problems:
            message = "Invalid swarm configuration: " + "; ".join(problems)
            log_error(message, module_name)
            raise InvalidConfiguration(message)

    def _slice(self, i: int) -> slice:
        return slice(i * self.dim, (i + 1) * self.dim)

    # --- Update Engine ---

    def tick(self, steps: int = 1):
        """
        Advances the swarm by `steps` generations (default one).

        Per particle, in index order: velocity and position are updated for
        every dimension using two fresh draws (rp, rg) from [0, 1), then the
        personal best and global best are refreshed before the next particle
        is processed. Positions are not clamped to the initial bounds.
        """
        for _ in range(steps):
            self._tick_once()
        self._report_non_finite()

    def _tick_once(self):
        dim = self.dim
        for i in range(self.size):
            s = self._slice(i)

            # rp and rg are interleaved per dimension: rp_0, rg_0, rp_1, rg_1, ...
            draws = np.asarray(self.random_source.uniform(0.0, 1.0, 2 * dim), dtype=float).reshape(dim, 2)
            rp = draws[:, 0]
            rg = draws[:, 1]

            self.v[s] = (self.w * self.v[s]
                         + self.cp * rp * (self.p[s] - self.x[s])
                         + self.cg * rg * (self.g - self.x[s]))
            self.x[s] += self.v[s]

            if rastrigin(self.x[s]) < rastrigin(self.p[s]):
                self.p[s] = self.x[s]

                if rastrigin(self.p[s]) < rastrigin(self.g):
                    self.g[:] = self.p[s]
                    log_debug(f"Tick {self.iteration}: particle {i} improved GBest to "
                              f"{rastrigin(self.g):.6e}", module_name)

        self.iteration += 1

    # --- Numeric Diagnostics ---

    def _count_non_finite(self):
        return int(np.count_nonzero(~np.isfinite(self.x))), int(np.count_nonzero(~np.isfinite(self.v)))

    def _report_non_finite(self):
        bad_x, bad_v = self._count_non_finite()
        if bad_x or bad_v:
            message = (f"NumericOverflow after tick {self.iteration}: {bad_x} non-finite positions, "
                       f"{bad_v} non-finite velocities (w={self.w}, cp={self.cp}, cg={self.cg}).")
            log_warning(message, module_name)
            self.notifier.notify(message, "warning")

    def check_finite(self):
        """Raises NumericOverflow if any position or velocity is NaN or infinite."""
        bad_x, bad_v = self._count_non_finite()
        if bad_x or bad_v:
            raise NumericOverflow(f"{bad_x} non-finite positions, {bad_v} non-finite velocities",
                                  non_finite_positions=bad_x, non_finite_velocities=bad_v)

    # --- Accessors ---
    # Views alias the live arrays: they are read-only and show the state
    # as of the latest tick. Copy them to keep a snapshot.

    def positions(self) -> np.ndarray:
        return _read_only(self.x)

    def velocities(self) -> np.ndarray:
        return _read_only(self.v)

    def personal_bests(self) -> np.ndarray:
        return _read_only(self.p)

    def global_best(self) -> np.ndarray:
        return _read_only(self.g)

    def global_best_value(self) -> float:
        return rastrigin(self.g)

    def personal_best_values(self) -> np.ndarray:
        return np.array([rastrigin(self.p[self._slice(i)]) for i in range(self.size)])

    def particle(self, i: int) -> np.ndarray:
        """Read-only position of particle i."""
        if not 0 <= i < self.size:
            raise IndexError(f"particle index {i} out of range for swarm of size {self.size}")
        return _read_only(self.x[self._slice(i)])

    def __repr__(self):
        return (f"SwarmState(size={self.size}, dim={self.dim}, iteration={self.iteration}, "
                f"gbest={self.global_best_value():.4e})")


# --- Host Entry Points ---

def create_swarm(lower, upper, dim, size, w, cp, cg, random_source=None, notifier=None) -> SwarmState:
    """Builds a swarm; raises InvalidConfiguration for bad bounds, dim or size."""
    return SwarmState(lower, upper, dim, size, w, cp, cg,
                      random_source=random_source, notifier=notifier)


def tick(swarm: SwarmState, steps: int = 1):
    swarm.tick(steps)


def positions(swarm: SwarmState) -> np.ndarray:
    return swarm.positions()
