import matplotlib.pyplot as plt
import numpy as np
from matplotlib import animation

from PSO_CORE import CONFIG
from PSO_CORE.PSO.Errors import DimensionMismatch
from PSO_CORE.PSO.ObjectiveFunctions.Rastrigin import RastriginFunction


class SwarmVisualizer:
    """Animates a 2-D swarm over the Rastrigin contour, one tick per frame."""

    def __init__(self, swarm, interval=CONFIG.ANIMATION_INTERVAL, resolution=CONFIG.CONTOUR_RESOLUTION):
        if swarm.dim != 2:
            raise DimensionMismatch("Visualizer only supports 2D swarms.")

        self.swarm = swarm
        self.bounds = (swarm.lower, swarm.upper)
        self.interval = interval
        self.resolution = resolution
        self.on_frame = None  # Optional callable(swarm) run after each tick

        self.fig, self.ax = plt.subplots()
        self.particle_dots = None
        self.gbest_dot = None
        self.anim = None

        self._setup_plot()

    def _setup_plot(self):
        self.ax.set_xlim(self.bounds[0], self.bounds[1])
        self.ax.set_ylim(self.bounds[0], self.bounds[1])
        self.ax.set_title("Particle Swarm - Rastrigin")
        self.ax.set_xlabel("x1")
        self.ax.set_ylabel("x2")

        X, Y, Z = RastriginFunction(dim=2, bounds=self.bounds).landscape(self.resolution)
        self.ax.contourf(X, Y, Z, levels=50, cmap='viridis', alpha=0.6)
        self.ax.contour(X, Y, Z, levels=20, colors='k', linewidths=0.2, alpha=0.3)

        xy = self._particle_xy()
        self.particle_dots, = self.ax.plot(xy[:, 0], xy[:, 1], 'bo', markersize=4, label='Particles')
        self.gbest_dot, = self.ax.plot([], [], 'ro', label='Global Best')
        self._update_gbest()
        self.ax.legend(loc='upper right')

    def _particle_xy(self):
        # Copy out of the read-only view before the next tick mutates it
        return np.array(self.swarm.positions()).reshape(self.swarm.size, 2)

    def _update_gbest(self):
        g = self.swarm.global_best()
        self.gbest_dot.set_data([g[0]], [g[1]])

    def _update_plot(self):
        xy = self._particle_xy()
        self.particle_dots.set_data(xy[:, 0], xy[:, 1])
        self._update_gbest()
        self.ax.set_title(f"Particle Swarm - Rastrigin (tick {self.swarm.iteration}, "
                          f"best {self.swarm.global_best_value():.4f})")

    def _animate_step(self, _frame):
        self.swarm.tick()
        if self.on_frame is not None and self.on_frame(self.swarm):
            self.anim.event_source.stop()
        self._update_plot()
        return self.particle_dots, self.gbest_dot

    def animate(self, num_steps=CONFIG.NUM_STEPS, show=True):
        """Runs `num_steps` ticks as animation frames."""
        self.anim = animation.FuncAnimation(
            self.fig,
            self._animate_step,
            frames=num_steps,
            interval=self.interval,
            repeat=False,
            blit=False
        )
        if show:
            plt.show()
        return self.anim
