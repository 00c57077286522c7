# main.py
"""
Main entry point for the bouncing particles simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json` (or the path given as the first
   command-line argument).
2. Initializes the logging system.
3. Validates the configuration and builds the arena and particles.
4. Runs the tick loop.
5. Handles clean shutdown.
"""
import logging
import sys
import cProfile
import pstats
import io
from typing import List, Optional

from utils import setup_logging, load_config, validate_config, ConfigurationError


def main(argv: Optional[List[str]] = None) -> int:
    """
    The main function to run the simulation.

    Returns:
        int: The process exit status.
    """
    argv = sys.argv[1:] if argv is None else argv
    config_path = argv[0] if argv else 'config.json'

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config)

    logging.info("--- Bouncing Particles Simulation Starting ---")

    try:
        validate_config(config)
    except ConfigurationError:
        logging.info("--- Bouncing Particles Simulation Aborted ---")
        return 1

    arena_params = config['arena']
    sim_params = config['simulation_parameters']
    run_params = config['run_control']
    vis_params = config['visualization']

    from arena import Arena
    from particle import ParticleSystem
    from simulation import Simulation
    from visualization import create_renderer

    # --- Component Initialization ---
    arena = Arena.from_size(arena_params['width'], arena_params['height'])
    particles = ParticleSystem(sim_params, arena)
    renderer = create_renderer(vis_params, arena)
    sim = Simulation(particles, renderer, run_params)

    profiler = cProfile.Profile() if run_params.get('profile') else None

    if profiler:
        profiler.enable()
    try:
        sim.run()
    except KeyboardInterrupt:
        logging.info(f"Interrupted at step {sim.step_num}.")
    finally:
        if profiler:
            profiler.disable()
        renderer.close()
    logging.info("Simulation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Bouncing Particles Simulation Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
