from pathlib import Path

from PSO_CORE import CONFIG
from PSO_CORE.Graphics.Visualizer import SwarmVisualizer
from PSO_CORE.Logs.logger import log_header, log_success, set_debug
from PSO_CORE.Notify.Notifier import greet
from PSO_CORE.PSO.Metrics.Convergence import ConvergenceTracker
from PSO_CORE.PSO.ObjectiveFunctions.Rastrigin import RastriginFunction
from PSO_CORE.PSO.RandomSource import NumpyRandomSource
from PSO_CORE.PSO.Swarm import create_swarm

module_name = Path(__file__).stem


if __name__ == "__main__":
    if CONFIG.DEBUG:
        set_debug(True)

    greet()
    log_header("=== PSO on Rastrigin ===", module_name)

    RastriginFunction(dim=2, bounds=(CONFIG.LOWER, CONFIG.UPPER)).plot_3d_surface()

    swarm = create_swarm(CONFIG.LOWER, CONFIG.UPPER, 2, CONFIG.SIZE,
                         CONFIG.W, CONFIG.CP, CONFIG.CG,
                         random_source=NumpyRandomSource(CONFIG.SEED))
    tracker = ConvergenceTracker()

    visualizer = SwarmVisualizer(swarm)
    visualizer.on_frame = tracker.update  # Stops the animation once converged
    visualizer.animate(num_steps=CONFIG.NUM_STEPS)

    log_success(f"Finished after {swarm.iteration} ticks. GBest {swarm.global_best_value():.6e} "
                f"at {swarm.global_best()}", module_name)
