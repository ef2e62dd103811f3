"""
mousequake - Trajectory Engine
Generates the relative pointer moves that trace each quake pattern.

Every trajectory yields deltas, never absolute positions. Summing one
period of deltas returns to the starting point, so the pointer ends each
cycle where it began.
"""

import math
from dataclasses import dataclass

import numpy as np

from config import Pattern


@dataclass(frozen=True)
class Displacement:
    """Relative pointer move in pixels"""
    dx: float
    dy: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)


class Trajectory:
    """
    Base class for all patterns.

    Subclasses hold only the rolling index/sign needed for the next delta.
    Trajectories are infinite iterators over Displacement.
    """

    period: int = 1

    def next_displacement(self) -> Displacement:
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self) -> Displacement:
        return self.next_displacement()


class LinearTrajectory(Trajectory):
    """Back and forth along X: +size/2, -size/2, ..."""

    period = 2

    def __init__(self, size: float):
        self.current_x = size / 2.0

    def next_displacement(self) -> Displacement:
        point = Displacement(self.current_x, 0.0)
        self.current_x = -self.current_x
        return point


class _SampledCurveTrajectory(Trajectory):
    """Closed parametric curve sampled at `steps` points over one turn.

    Each delta is recomputed from the step index, so no error accumulates
    from one cycle to the next.
    """

    steps = 36
    period = steps

    def __init__(self, size: float):
        self.current_step = 0

    def _point(self, t: float) -> tuple[float, float]:
        raise NotImplementedError

    def next_displacement(self) -> Displacement:
        t = 2 * np.pi * self.current_step / self.steps
        next_t = 2 * np.pi * (self.current_step + 1) / self.steps

        current_x, current_y = self._point(t)
        next_x, next_y = self._point(next_t)

        self.current_step = (self.current_step + 1) % self.steps
        return Displacement(float(next_x - current_x), float(next_y - current_y))


class CircleTrajectory(_SampledCurveTrajectory):
    """Circle of diameter `size` in 10 degree steps."""

    def __init__(self, size: float):
        super().__init__(size)
        self.radius = size / 2.0

    def _point(self, t: float) -> tuple[float, float]:
        return self.radius * np.cos(t), self.radius * np.sin(t)


class InfinityTrajectory(_SampledCurveTrajectory):
    """Figure-eight: x = A*sin(t), y = A*sin(2t)/2 with A = size/2."""

    def __init__(self, size: float):
        super().__init__(size)
        self.amplitude = size / 2.0

    def _point(self, t: float) -> tuple[float, float]:
        return self.amplitude * np.sin(t), self.amplitude * np.sin(2 * t) / 2.0


class _PointTableTrajectory(Trajectory):
    """Walks a fixed, precomputed table of vertices in cyclic order."""

    def __init__(self, points: np.ndarray):
        points = np.array(points, dtype=np.float64)
        points.flags.writeable = False
        self.points = points
        self.period = len(points)
        self.current_index = 0

    def next_displacement(self) -> Displacement:
        next_index = (self.current_index + 1) % self.period
        dx, dy = self.points[next_index] - self.points[self.current_index]
        self.current_index = next_index
        return Displacement(float(dx), float(dy))


class StarTrajectory(_PointTableTrajectory):
    """5-pointed star: 10 vertices alternating outer/inner radius, first point up."""

    inner_ratio = 0.4

    def __init__(self, size: float):
        outer_radius = size / 2.0
        inner_radius = outer_radius * self.inner_ratio

        idx = np.arange(10)
        angles = np.pi * idx / 5.0 - np.pi / 2.0
        radii = np.where(idx % 2 == 0, outer_radius, inner_radius)
        super().__init__(np.column_stack((radii * np.cos(angles), radii * np.sin(angles))))


class SquareTrajectory(_PointTableTrajectory):
    """Square of side `size`, starting at (half, half) and moving along -X first."""

    def __init__(self, size: float):
        half = size / 2.0
        super().__init__([(half, half), (-half, half), (-half, -half), (half, -half)])


_TRAJECTORIES = {
    Pattern.LINEAR: LinearTrajectory,
    Pattern.CIRCLE: CircleTrajectory,
    Pattern.STAR: StarTrajectory,
    Pattern.SQUARE: SquareTrajectory,
    Pattern.INFINITY: InfinityTrajectory,
}


def make_trajectory(pattern: Pattern, size: float) -> Trajectory:
    """Build the trajectory for a pattern. Size must be a positive, finite pixel count."""
    if not math.isfinite(size) or size <= 0:
        raise ValueError(f"size must be positive, got {size!r}")
    return _TRAJECTORIES[Pattern(pattern)](float(size))
