# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs. The
DEFAULT_* dictionaries mirror the sections of `config.json` and fill in any
key the configuration file leaves out.
"""

# --- Board rendering ---
OCCUPIED_CELL = 'O'
EMPTY_CELL = '.'
# ANSI "erase display", written before every frame.
CLEAR_SCREEN = '\x1b[2J'

RENDERERS = ('terminal', 'pygame')

# --- Pygame window (optional renderer) ---
WINDOW_TITLE = "Bouncing Particles"
BACKGROUND_COLOR = (24, 24, 24)  # Dark Gray
GRID_LINE_COLOR = (40, 40, 40)
PARTICLE_COLOR = (0, 255, 255)  # Cyan
FPS = 60

# --- Configuration defaults ---
DEFAULT_ARENA = {
    'width': 20,
    'height': 100,
}

DEFAULT_SIMULATION_PARAMETERS = {
    'particle_count': 100,
    'max_speed': 1.0,
    # Reserved: the reflection math does not apply any dampening.
    'dampening': 0.8,
    'seed': None,
    'use_jit': True,
}

DEFAULT_RUN_CONTROL = {
    'tick_count': 100000,
    'tick_interval_ms': 15,
    'log_throttle_steps': 1000,
    'profile': False,
}

DEFAULT_VISUALIZATION = {
    'renderer': 'terminal',
    # (columns, rows) of the character grid
    'resolution': [20, 100],
    'cell_size': 8,
}

DEFAULT_LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(levelname)s - %(message)s',
    'log_file': 'logs/simulation.log',
}
