# --- Rastrigin Function Implementation ---
import numpy as np
from matplotlib import pyplot as plt

from PSO_CORE.PSO.Errors import DimensionMismatch

RASTRIGIN_A = 10.0


def _as_vector(x) -> np.ndarray:
    xs = np.asarray(x, dtype=float)
    if xs.ndim != 1:
        raise DimensionMismatch(f"Rastrigin expects a 1-D vector, got shape {xs.shape}.")
    if xs.shape[0] == 0:
        raise DimensionMismatch("Rastrigin is undefined for an empty vector.")
    return xs


def rastrigin(x) -> float:
    """
    f(x) = a*n + sum(x_i^2 - a*cos(2*pi*x_i)), a = 10.

    Global minimum 0 at the zero vector. Raises DimensionMismatch for an
    empty or non 1-D input.
    """
    xs = _as_vector(x)
    return float(RASTRIGIN_A * xs.shape[0] + np.sum(xs ** 2 - RASTRIGIN_A * np.cos(2 * np.pi * xs)))


# Name the host uses for standalone evaluation
objective = rastrigin


class RastriginFunction:
    """Fixed-dimension Rastrigin evaluator used for plotting and metrics."""

    def __init__(self, dim=2, bounds=(-5.12, 5.12)):
        if dim <= 0:
            raise DimensionMismatch(f"dim must be positive, got {dim}.")
        self.dim = dim
        self.bounds = bounds

    def evaluate(self, x: np.ndarray) -> float:
        xs = _as_vector(x)
        if xs.shape[0] != self.dim:
            raise DimensionMismatch(f"Expected a vector of length {self.dim}, got {xs.shape[0]}.")
        return rastrigin(xs)

    def evaluate_matrix(self, X: np.ndarray) -> np.ndarray:
        """Evaluates each row of an (m, dim) matrix."""
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.dim:
            raise DimensionMismatch(f"Expected shape (m, {self.dim}), got {X.shape}.")
        return RASTRIGIN_A * self.dim + np.sum(X ** 2 - RASTRIGIN_A * np.cos(2 * np.pi * X), axis=1)

    def landscape(self, resolution=100):
        """Returns (X, Y, Z) grids over the bounds for a 2-D function."""
        if self.dim != 2:
            raise DimensionMismatch("Fitness landscapes are only available for 2-D functions.")

        x = np.linspace(self.bounds[0], self.bounds[1], resolution)
        y = np.linspace(self.bounds[0], self.bounds[1], resolution)
        X, Y = np.meshgrid(x, y)
        Z = self.evaluate_matrix(np.column_stack([X.ravel(), Y.ravel()])).reshape(X.shape)
        return X, Y, Z

    def plot_3d_surface(self, resolution=100, show=True):
        X, Y, Z = self.landscape(resolution)

        fig = plt.figure(figsize=(10, 7))
        ax = fig.add_subplot(111, projection='3d')
        ax.plot_surface(X, Y, Z, cmap='viridis', edgecolor='none', alpha=0.8)
        ax.set_title("Rastrigin Function")
        ax.set_xlabel("x1")
        ax.set_ylabel("x2")
        ax.set_zlabel("f(x)")

        if show:
            plt.show()
        return fig
