# === Central Default Definitions ===
# create_swarm() takes every parameter explicitly; these values feed the
# demo driver, the visualizer and the tests.

# --- Search Space ---
LOWER = -5.12
UPPER = 5.12
DIM = 2
SIZE = 30

# --- Hyperparameters ---
W = 0.7    # Inertia weight
CP = 0.8   # Personal-best attraction
CG = 0.8   # Global-best attraction

# --- Random Source ---
SEED = None  # Set to an int for reproducible runs

# --- Driver / Animation ---
NUM_STEPS = 200
ANIMATION_INTERVAL = 100  # Milliseconds between frames
CONTOUR_RESOLUTION = 100

# --- Convergence Detection ---
CONVERGENCE_PATIENCE = 50
CONVERGENCE_THRESHOLD_GBEST = 1e-8
CONVERGENCE_THRESHOLD_PBEST_STD = 1e-6

# --- Logging ---
DEBUG = False

# --- Host Notification ---
GREETING = "Hello, pso!"
