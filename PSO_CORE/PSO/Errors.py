# --- PSO Error Taxonomy ---


class PSOError(Exception):
    """Base class for every error raised by PSO_CORE."""


class InvalidConfiguration(PSOError, ValueError):
    """Malformed bounds or a zero-sized dimension/population at construction time."""


class DimensionMismatch(PSOError, ValueError):
    """Objective function called with an empty or wrongly-sized vector."""


class NumericOverflow(PSOError, ArithmeticError):
    """
    Swarm state contains NaN or infinite values.

    Reported as a diagnostic by SwarmState.tick(); only raised by
    SwarmState.check_finite().
    """

    def __init__(self, message: str, non_finite_positions: int = 0, non_finite_velocities: int = 0):
        super().__init__(message)
        self.non_finite_positions = non_finite_positions
        self.non_finite_velocities = non_finite_velocities
