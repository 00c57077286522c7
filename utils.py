# utils.py
"""
Utility functions for the simulation framework.

This module provides helper functions, such as logging setup and
configuration loading, that are used across different parts of the
application but do not belong to a specific domain like motion or
rendering.
"""
import logging
import logging.handlers
import json
import math
import os
from typing import Dict, Any

from constants import (
    DEFAULT_ARENA, DEFAULT_RUN_CONTROL, DEFAULT_SIMULATION_PARAMETERS,
    DEFAULT_VISUALIZATION, DEFAULT_LOGGING, RENDERERS
)

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler on stderr
#     and a rotating file handler.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: the parsed JSON document with every section filled in from
#     the defaults in constants.py.
#
# validate_config(config: Dict[str, Any]) -> None:
#   - Side Effects: raises ConfigurationError on the first invalid value.


class ConfigurationError(ValueError):
    """Raised when the configuration describes an impossible simulation."""


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file. The console
    handler writes to stderr so it never interleaves with rendered frames.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', DEFAULT_LOGGING['level']).upper()
    log_format = log_config.get('format', DEFAULT_LOGGING['format'])
    log_file_path = log_config.get('log_file', DEFAULT_LOGGING['log_file'])

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # Rotates when the log reaches 1MB, keeps 5 backup logs.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")


def with_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a copy of the config with every missing key taken from the defaults."""
    sections = {
        'arena': DEFAULT_ARENA,
        'simulation_parameters': DEFAULT_SIMULATION_PARAMETERS,
        'run_control': DEFAULT_RUN_CONTROL,
        'visualization': DEFAULT_VISUALIZATION,
        'logging': DEFAULT_LOGGING,
    }
    merged = dict(config)
    for name, defaults in sections.items():
        merged[name] = {**defaults, **config.get(name, {})}
    return merged


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file and fills in the defaults."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return with_defaults(config)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise


def _reject(msg: str) -> None:
    logging.critical(msg)
    raise ConfigurationError(msg)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_config(config: Dict[str, Any]) -> None:
    """
    Rejects configurations the simulation cannot run with.

    Expects a config that has been through `with_defaults`.

    Raises:
        ConfigurationError: On the first invalid value found.
    """
    arena = config['arena']
    for key in ('width', 'height'):
        value = arena[key]
        if not _is_number(value) or value <= 0:
            _reject(f"Configuration error: arena.{key} must be a positive number, got {value!r}.")

    sim_params = config['simulation_parameters']
    count = sim_params['particle_count']
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        _reject(f"Configuration error: particle_count must be a non-negative integer, got {count!r}.")
    max_speed = sim_params['max_speed']
    if not _is_number(max_speed) or max_speed < 0:
        _reject(f"Configuration error: max_speed must be a non-negative number, got {max_speed!r}.")
    seed = sim_params['seed']
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        _reject(f"Configuration error: seed must be null or a non-negative integer, got {seed!r}.")

    run_params = config['run_control']
    tick_count = run_params['tick_count']
    if not isinstance(tick_count, int) or isinstance(tick_count, bool) or tick_count < 0:
        _reject(f"Configuration error: tick_count must be a non-negative integer, got {tick_count!r}.")
    interval = run_params['tick_interval_ms']
    if not _is_number(interval) or interval < 0:
        _reject(f"Configuration error: tick_interval_ms must be non-negative, got {interval!r}.")
    throttle = run_params['log_throttle_steps']
    if not isinstance(throttle, int) or isinstance(throttle, bool) or throttle <= 0:
        _reject(f"Configuration error: log_throttle_steps must be a positive integer, got {throttle!r}.")

    vis_params = config['visualization']
    resolution = vis_params['resolution']
    if (
        not isinstance(resolution, (list, tuple))
        or len(resolution) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in resolution)
    ):
        _reject(f"Configuration error: visualization.resolution must be two positive integers, got {resolution!r}.")
    if vis_params['renderer'] not in RENDERERS:
        _reject(
            f"Configuration error: unknown renderer {vis_params['renderer']!r}. "
            f"Expected one of {', '.join(RENDERERS)}."
        )

    logging.debug("Configuration validated.")
