# particle.py
"""
Manages the state of all particles in the simulation.

This module defines the ParticleSystem class, which is responsible for
initializing and storing particle data (position, direction, speed) in
NumPy arrays and advancing every particle by one tick.
"""
import logging
import math
import numpy as np
from typing import Dict, Any

from arena import Arena
from motion import advance_all, advance_all_numba

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], arena: Arena):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": Optional[int]
#         - "particle_count": int
#         - "max_speed": float
#         - "use_jit": bool (optional, default True)
#       - arena: The arena the particles live in.
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.directions is a NumPy array of shape (N,) of dtype float64.
#       - self.speeds is a NumPy array of shape (N,) of dtype float64 and
#         never changes after construction.
#
#   - step_all(self) -> None:
#     - Side Effects: Advances every particle by one tick, in index order.
#     - Invariants: Every position stays inside the closed arena rectangle.

class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], arena: Arena):
        """
        Initializes the particle system.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            arena (Arena): The arena particles are placed in and bounce off.
        """
        self.arena = arena
        self.particle_count = params['particle_count']
        self.max_speed = float(params.get('max_speed', 1.0))
        self.use_jit = params.get('use_jit', True)
        self.seed = params.get('seed')

        # All randomness comes from a single RNG seeded once.
        self.rng = np.random.default_rng(self.seed)

        self.positions = self.rng.uniform(
            low=[0.0, 0.0],
            high=[arena.width, arena.height],
            size=(self.particle_count, 2)
        )
        self.directions = self.rng.uniform(0.0, 2.0 * math.pi, size=self.particle_count)
        self.speeds = self.rng.uniform(0.0, self.max_speed, size=self.particle_count)

        logging.info(
            f"ParticleSystem initialized with {self.particle_count} particles "
            f"in a {arena.width}x{arena.height} arena."
        )
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Directions shape: {self.directions.shape}, "
            f"Speeds shape: {self.speeds.shape}, "
            f"JIT enabled: {self.use_jit}"
        )

    def step_all(self) -> None:
        """
        Advances every particle by one tick.

        Only positions and directions change; each particle keeps its speed,
        so the next tick starts from the full per-tick distance again.
        """
        if self.use_jit:
            advance_all_numba(
                self.positions, self.directions, self.speeds,
                self.arena.width, self.arena.height
            )
        else:
            advance_all(self.positions, self.directions, self.speeds, self.arena)

    def boundary_count(self) -> int:
        """Number of particles currently resting on a wall."""
        x = self.positions[:, 0]
        y = self.positions[:, 1]
        on_wall = (x == 0.0) | (x == self.arena.width) | (y == 0.0) | (y == self.arena.height)
        return int(np.count_nonzero(on_wall))
