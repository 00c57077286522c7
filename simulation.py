# simulation.py
"""
Drives the fixed-rate tick loop.

This module defines the Simulation class, which owns the ordering of a
tick: advance every particle, render one frame, then wait for the tick
interval. Ticks never overlap.
"""
import logging
import time
import numpy as np
from typing import Dict, Any, Callable

from particle import ParticleSystem

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, renderer, params: Dict[str, Any]):
#     - Inputs:
#       - particles: An initialized ParticleSystem object.
#       - renderer: Any object with draw(particles) -> bool and close().
#       - params: The "run_control" section of config.json.
#         - "tick_count": int
#         - "tick_interval_ms": float
#         - "log_throttle_steps": int
#
#   - step(self) -> bool:
#     - Side Effects: Advances all particles, then renders one frame.
#     - Outputs: False if the renderer asked to stop.
#
#   - run(self) -> int:
#     - Outputs: the number of completed ticks.

class Simulation:
    """
    Runs advance, render and wait phases in strict order for each tick.
    """
    def __init__(
        self,
        particles: ParticleSystem,
        renderer,
        params: Dict[str, Any],
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initializes the tick loop.

        Args:
            particles (ParticleSystem): The particle system to simulate.
            renderer: Consumes particle positions once per tick.
            params (Dict[str, Any]): Run control parameters from config.
            sleep (Callable[[float], None]): Waits between ticks.
        """
        self.particles = particles
        self.renderer = renderer
        self.tick_count = params.get('tick_count', 100000)
        self.tick_interval = params.get('tick_interval_ms', 15) / 1000.0
        self.log_throttle = params.get('log_throttle_steps', 1000)
        self.sleep = sleep
        self.step_num = 0

        logging.info(
            f"Simulation initialized: {self.tick_count} ticks "
            f"at {self.tick_interval * 1000:.0f}ms intervals."
        )

    def step(self) -> bool:
        """
        Executes one tick: advances all particles and renders the result.
        """
        self.particles.step_all()
        self.step_num += 1
        return self.renderer.draw(self.particles)

    def run(self) -> int:
        """
        Runs until the tick count is reached or the renderer asks to stop.
        """
        while self.step_num < self.tick_count:
            if not self.step():
                logging.info(f"Renderer requested shutdown at step {self.step_num}.")
                break

            # Hot loops must throttle logs
            if self.step_num % self.log_throttle == 0:
                logging.info(f"Simulation step {self.step_num}/{self.tick_count}")
                if logging.getLogger().isEnabledFor(logging.DEBUG):
                    mean_speed = np.mean(self.particles.speeds) if self.particles.particle_count else 0.0
                    logging.debug(
                        f"Step {self.step_num} | Mean speed: {mean_speed:.4f} | "
                        f"On boundary: {self.particles.boundary_count()}"
                    )

            self.sleep(self.tick_interval)
        else:
            logging.info(f"Reached tick_count ({self.tick_count}). Stopping simulation.")

        return self.step_num
