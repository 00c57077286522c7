"""Unit tests for the motion resolver."""

import math

import numpy as np
import pytest

from arena import Arena
from geometry import Point
from motion import Velocity, advance, advance_all, advance_all_numba


def sign(value):
    return math.copysign(1.0, value)


class TestUnobstructed:
    """Particles that stay clear of the walls."""

    def test_returns_candidate_and_same_velocity(self, arena):
        """An in-bounds move is a plain straight-line step."""
        rng = np.random.default_rng(1)
        for _ in range(200):
            position = Point(rng.uniform(1.0, 19.0), rng.uniform(1.0, 99.0))
            velocity = Velocity(direction=rng.uniform(0.0, 2.0 * math.pi), distance=rng.uniform(0.0, 1.0))
            new_position, new_velocity = advance(position, velocity, arena)

            assert new_position == (
                position.x + velocity.distance * math.cos(velocity.direction),
                position.y + velocity.distance * math.sin(velocity.direction),
            )
            assert new_velocity == velocity

    def test_zero_distance_is_noop(self, arena):
        """A particle that does not move stays put."""
        velocity = Velocity(direction=1.234, distance=0.0)
        assert advance(Point(3.0, 4.0), velocity, arena) == (Point(3.0, 4.0), velocity)

    @pytest.mark.parametrize("position", [(0.0, 50.0), (20.0, 50.0), (10.0, 0.0), (10.0, 100.0), (20.0, 100.0)])
    def test_zero_distance_on_wall_is_noop(self, arena, position):
        """A resting particle on a wall is not moved by the degenerate contact check."""
        velocity = Velocity(direction=0.5, distance=0.0)
        assert advance(Point(*position), velocity, arena) == (Point(*position), velocity)


class TestReflection:
    """Particles that strike a wall within the tick."""

    def test_vertical_wall_flips_horizontal_component(self, arena):
        """Bouncing off the left wall mirrors cos and keeps sin."""
        direction = 3.0 * math.pi / 4.0
        _, bounced = advance(Point(1.0, 50.0), Velocity(direction=direction, distance=3.0), arena)
        assert sign(math.cos(bounced.direction)) == -sign(math.cos(direction))
        assert sign(math.sin(bounced.direction)) == sign(math.sin(direction))
        assert bounced.direction == pytest.approx(math.pi / 4.0)

    def test_horizontal_wall_flips_vertical_component(self, arena):
        """Bouncing off the bottom wall mirrors sin and keeps cos."""
        direction = math.pi / 3.0
        _, bounced = advance(Point(10.0, 99.5), Velocity(direction=direction, distance=2.0), arena)
        assert sign(math.cos(bounced.direction)) == sign(math.cos(direction))
        assert sign(math.sin(bounced.direction)) == -sign(math.sin(direction))
        assert bounced.direction == pytest.approx(2.0 * math.pi - direction)

    @pytest.mark.parametrize("position, direction, axis", [
        ((5.0, 50.0), math.pi, 0),
        ((15.0, 50.0), 0.0, 0),
        ((10.0, 3.0), 3.0 * math.pi / 2.0, 1),
        ((10.0, 90.0), math.pi / 2.0, 1),
    ])
    def test_round_trip_bounce(self, arena, position, direction, axis):
        """Launched at a wall d away with budget 2d, a particle comes back to its start."""
        size = (arena.width, arena.height)[axis]
        start = position[axis]
        d = min(start, size - start)
        new_position, _ = advance(Point(*position), Velocity(direction=direction, distance=2.0 * d), arena)
        assert new_position[axis] == pytest.approx(start)
        assert new_position[1 - axis] == pytest.approx(position[1 - axis])

    def test_distance_is_preserved(self, arena):
        """The leftover budget is never exposed; the per-tick distance is."""
        _, bounced = advance(Point(1.0, 50.0), Velocity(direction=math.pi, distance=0.75 * 4), arena)
        assert bounced.distance == 3.0

    def test_multiple_bounces_in_one_tick(self):
        """A long step bounces off both side walls."""
        narrow = Arena.from_size(2.0, 100.0)
        new_position, bounced = advance(Point(1.0, 50.0), Velocity(direction=0.0, distance=6.0), narrow)
        # 1 -> 2 (right wall) -> 0 (left wall) -> 2 (right wall) -> 1
        assert new_position.x == pytest.approx(1.0)
        assert math.cos(bounced.direction) == pytest.approx(-1.0)

    def test_near_corner_bounces_off_both_walls(self, arena):
        """Heading past a corner bounces off the left wall, then the top wall."""
        direction = 5.0 * math.pi / 4.0
        new_position, bounced = advance(Point(1.0, 1.5), Velocity(direction=direction, distance=4.0), arena)
        travelled = 4.0 / math.sqrt(2.0)
        assert new_position == pytest.approx((travelled - 1.0, travelled - 1.5), abs=1e-9)
        assert math.cos(bounced.direction) == pytest.approx(math.sqrt(0.5))
        assert math.sin(bounced.direction) == pytest.approx(math.sqrt(0.5))

    def test_corner_tie_goes_to_x_wall(self, arena):
        """Both walls struck at the same distance: the x-wall reflection applies first."""
        direction = 5.0 * math.pi / 4.0
        new_position, bounced = advance(Point(0.0, 0.0), Velocity(direction=direction, distance=1.0), arena)
        # x-wall first: pi - 5pi/4 = -pi/4, then y-wall: 2pi + pi/4.
        # The y-wall first would end at pi/4 instead.
        assert bounced.direction == pytest.approx(9.0 * math.pi / 4.0)
        assert new_position == pytest.approx((math.sqrt(0.5), math.sqrt(0.5)))
        assert arena.contains(new_position)

    @pytest.mark.parametrize("budget", [2.0 * math.sqrt(2.0), 4.0])
    def test_aimed_exactly_at_corner(self, arena, budget):
        """A path through the corner ends inside, mirrored off both walls."""
        new_position, _ = advance(Point(1.0, 1.0), Velocity(direction=5.0 * math.pi / 4.0, distance=budget), arena)
        # The corner is sqrt(2) away; what is left runs back out along pi/4.
        leftover = (budget - math.sqrt(2.0)) / math.sqrt(2.0)
        assert new_position == pytest.approx((leftover, leftover), abs=1e-9)
        assert arena.contains(new_position)

    def test_contact_is_snapped_onto_wall(self, arena):
        """A bounce never leaves the particle a few ulps outside the wall it struck."""
        position = Point(7.629858652798401, 50.38029501945296)
        velocity = Velocity(direction=1.3264775652900558, distance=51.22200985253195)
        for _ in range(6):
            position, velocity = advance(position, velocity, arena)
            assert arena.contains(position)


class TestContainment:
    """Particles never leave the arena."""

    def test_random_states_stay_inside(self):
        """Any in-bounds start and any finite speed ends inside the arena."""
        rng = np.random.default_rng(2024)
        for _ in range(500):
            arena = Arena.from_size(rng.uniform(1.0, 50.0), rng.uniform(1.0, 50.0))
            position = Point(rng.uniform(0.0, arena.width), rng.uniform(0.0, arena.height))
            velocity = Velocity(direction=rng.uniform(-4 * math.pi, 4 * math.pi), distance=rng.uniform(0.0, 20.0))
            new_position, _ = advance(position, velocity, arena)
            assert arena.contains(new_position)

    def test_repeated_ticks_stay_inside(self, arena):
        """Feeding each result back in for many ticks keeps the particle inside."""
        position = Point(10.0, 50.0)
        velocity = Velocity(direction=0.3, distance=0.9)
        for _ in range(5000):
            position, velocity = advance(position, velocity, arena)
            assert velocity.distance == 0.9
            assert arena.contains(position)

    @pytest.mark.parametrize("corner", [(0.0, 0.0), (20.0, 0.0), (0.0, 100.0), (20.0, 100.0)])
    def test_paths_through_corners_stay_inside(self, arena, corner):
        """Starts aimed straight at a corner, with budget past it, end inside on both paths."""
        rng = np.random.default_rng(17)
        count = 2000
        positions = rng.uniform([0.0, 0.0], [arena.width, arena.height], size=(count, 2))
        directions = np.arctan2(corner[1] - positions[:, 1], corner[0] - positions[:, 0])
        reach = np.hypot(corner[0] - positions[:, 0], corner[1] - positions[:, 1])
        speeds = reach * rng.uniform(1.0, 3.0, size=count)

        jit_positions, jit_directions = positions.copy(), directions.copy()
        py_positions, py_directions = positions.copy(), directions.copy()
        for _ in range(3):
            advance_all_numba(jit_positions, jit_directions, speeds, arena.width, arena.height)
            advance_all(py_positions, py_directions, speeds, arena)
            assert all(arena.contains(p) for p in jit_positions)
            assert all(arena.contains(p) for p in py_positions)


class TestBatchKernel:
    """The numba batch kernel agrees with the reference resolver."""

    def test_matches_advance(self):
        rng = np.random.default_rng(99)
        arena = Arena.from_size(20.0, 100.0)
        count = 300
        positions = rng.uniform([0.0, 0.0], [arena.width, arena.height], size=(count, 2))
        directions = rng.uniform(0.0, 2.0 * math.pi, size=count)
        speeds = rng.uniform(0.0, 30.0, size=count)

        jit_positions, jit_directions = positions.copy(), directions.copy()
        py_positions, py_directions = positions.copy(), directions.copy()
        for _ in range(20):
            advance_all_numba(jit_positions, jit_directions, speeds, arena.width, arena.height)
            advance_all(py_positions, py_directions, speeds, arena)

        np.testing.assert_allclose(jit_positions, py_positions, atol=1e-6)
        np.testing.assert_allclose(np.cos(jit_directions), np.cos(py_directions), atol=1e-6)
        np.testing.assert_allclose(np.sin(jit_directions), np.sin(py_directions), atol=1e-6)

    def test_zero_particles(self):
        positions = np.zeros((0, 2))
        directions = np.zeros(0)
        advance_all_numba(positions, directions, np.zeros(0), 20.0, 100.0)
        assert positions.shape == (0, 2)
