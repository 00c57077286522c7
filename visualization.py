# visualization.py
"""
Handles the visualization of the particle simulation.

Continuous particle positions are mapped onto a fixed-size character grid.
The grid is either written to a terminal as text, one row per line, or
drawn into a Pygame window.
"""
import logging
import os
import sys
import numpy as np
from typing import Optional, Sequence, TextIO, TYPE_CHECKING

from arena import Arena
from constants import (
    OCCUPIED_CELL, EMPTY_CELL, CLEAR_SCREEN, WINDOW_TITLE, BACKGROUND_COLOR,
    GRID_LINE_COLOR, PARTICLE_COLOR
)

# Forward reference for type hinting to avoid circular import
if TYPE_CHECKING:
    from particle import ParticleSystem


# --- Data Contracts ---
#
# board_coordinates(positions: np.ndarray, arena: Arena, resolution: Sequence[int]) -> np.ndarray:
#   - Inputs:
#     - positions: (N, 2) array of particle positions.
#     - resolution: (columns, rows) of the grid.
#   - Outputs: (N, 2) int array of (column, row) cell indices.
#   - Invariants: every index lies inside the grid, including positions
#     resting exactly on the right or bottom wall.
#
# class TerminalRenderer / PygameRenderer:
#   - draw(self, particles: ParticleSystem) -> bool:
#     - Outputs: False if the renderer wants the simulation to stop.
#   - close(self) -> None


def board_coordinates(positions: np.ndarray, arena: Arena, resolution: Sequence[int]) -> np.ndarray:
    """
    Maps continuous positions to (column, row) cells of the grid.

    Each axis is scaled independently: cell = floor(position / size * cells).
    """
    columns, rows = resolution
    size = np.array([arena.width, arena.height], dtype=np.float64)
    cells = np.array([columns, rows], dtype=np.float64)
    coords = np.floor(np.asarray(positions, dtype=np.float64) / size * cells).astype(np.int64)
    # A particle on the far wall maps to index == cells; keep it on the last cell.
    return np.clip(coords, 0, np.array([columns - 1, rows - 1]))


def render_board(positions: np.ndarray, arena: Arena, resolution: Sequence[int]) -> str:
    """
    Renders the occupied cells as text: `rows` lines of `columns` characters.
    """
    columns, rows = resolution
    board = np.full((rows, columns), EMPTY_CELL, dtype='<U1')
    coords = board_coordinates(positions, arena, resolution)
    board[coords[:, 1], coords[:, 0]] = OCCUPIED_CELL
    return '\n'.join(''.join(row) for row in board)


class TerminalRenderer:
    """
    Writes each frame to a text stream, clearing the previous frame first.
    """
    def __init__(self, arena: Arena, resolution: Sequence[int], stream: Optional[TextIO] = None):
        self.arena = arena
        self.resolution = tuple(resolution)
        self.stream = stream if stream is not None else sys.stdout
        logging.info(
            f"TerminalRenderer initialized with a "
            f"{self.resolution[0]}x{self.resolution[1]} board."
        )

    def draw(self, particles: "ParticleSystem") -> bool:
        board = render_board(particles.positions, self.arena, self.resolution)
        self.stream.write(f"{CLEAR_SCREEN}{board}\n")
        self.stream.flush()
        return True

    def close(self):
        pass


class PygameRenderer:
    """
    Draws the board into a Pygame window, one square per grid cell.
    """
    def __init__(self, arena: Arena, resolution: Sequence[int], cell_size: int = 8):
        """
        Initializes Pygame and the display window.
        """
        # Imported here so the terminal renderer never loads SDL.
        # Keep the import banner out of the frame stream on stdout.
        os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
        import pygame
        self._pygame = pygame

        pygame.init()
        self.arena = arena
        self.resolution = tuple(resolution)
        self.cell_size = cell_size
        width = self.resolution[0] * cell_size
        height = self.resolution[1] * cell_size
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(WINDOW_TITLE)

        # The empty grid never changes, so it is drawn once and blitted per frame.
        self.background = pygame.Surface((width, height))
        self.background.fill(BACKGROUND_COLOR)
        for column in range(self.resolution[0] + 1):
            x = column * cell_size
            pygame.draw.line(self.background, GRID_LINE_COLOR, (x, 0), (x, height))
        for row in range(self.resolution[1] + 1):
            y = row * cell_size
            pygame.draw.line(self.background, GRID_LINE_COLOR, (0, y), (width, y))

        logging.info(f"PygameRenderer initialized with Pygame display ({width}x{height}).")

    def draw(self, particles: "ParticleSystem") -> bool:
        """
        Draws all occupied cells and handles window events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        pygame = self._pygame
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down renderer.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down renderer.")
                return False

        self.screen.blit(self.background, (0, 0))
        radius = max(self.cell_size // 2 - 1, 1)
        coords = board_coordinates(particles.positions, self.arena, self.resolution)
        for column, row in coords:
            center = (
                int(column) * self.cell_size + self.cell_size // 2,
                int(row) * self.cell_size + self.cell_size // 2,
            )
            pygame.draw.circle(self.screen, PARTICLE_COLOR, center, radius)

        pygame.display.flip()
        return True

    def close(self):
        """Shuts down Pygame."""
        self._pygame.quit()


def create_renderer(vis_params: dict, arena: Arena):
    """Builds the renderer named by the visualization config section."""
    name = vis_params.get('renderer', 'terminal')
    resolution = vis_params['resolution']
    if name == 'pygame':
        return PygameRenderer(arena, resolution, vis_params.get('cell_size', 8))
    return TerminalRenderer(arena, resolution)
