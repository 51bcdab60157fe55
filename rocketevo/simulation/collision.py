from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math

import numpy as np

from rocketevo.physics import Rocket, Vec3

# Local-space extents of the meshes the oracle stands in for.
ROCKET_HALF_EXTENTS = (0.2, 0.75, 0.0)
WALL_HALF_EXTENTS = (1.0, 0.2, 0.0)
TARGET_RADIUS = 1.0


@dataclass(frozen=True)
class CollisionOutcome:
    hit_obstacle: bool = False
    hit_target: bool = False


NO_COLLISION = CollisionOutcome()


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box."""

    min: np.ndarray
    max: np.ndarray

    @classmethod
    def from_center(cls, center, half_extents) -> Box:
        c = np.asarray(center, dtype=float)
        h = np.abs(np.asarray(half_extents, dtype=float))
        return cls(min=c - h, max=c + h)

    @classmethod
    def from_points(cls, points: np.ndarray) -> Box:
        return cls(min=points.min(axis=0), max=points.max(axis=0))

    def intersects_box(self, other: Box) -> bool:
        return bool(np.all(self.min <= other.max) and np.all(other.min <= self.max))

    def intersects_sphere(self, sphere: Sphere) -> bool:
        closest = np.clip(sphere.center, self.min, self.max)
        delta = closest - sphere.center
        return float(np.dot(delta, delta)) <= sphere.radius**2


@dataclass(frozen=True)
class Sphere:
    center: np.ndarray
    radius: float


def rotated_box(center, half_extents, angle: float) -> Box:
    """World AABB of a local box rotated by ``-angle`` about z and translated."""
    hx, hy, hz = half_extents
    corners = np.array(
        [[sx * hx, sy * hy, sz * hz] for sx in (-1, 1) for sy in (-1, 1) for sz in (-1, 1)]
    )
    c, s = math.cos(-angle), math.sin(-angle)
    rotation = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    world = corners @ rotation.T + np.asarray(center, dtype=float)
    return Box.from_points(world)


class CollisionOracle(ABC):
    """Reports obstacle and target contact for a rocket after it moved."""

    @abstractmethod
    def check(self, rocket: Rocket) -> CollisionOutcome:
        """Return the collision outcome for *rocket* at its current position."""


class BoxCollisionOracle(CollisionOracle):
    """Wall as a scaled box, target as a scaled sphere, rocket as a rotated box."""

    def __init__(
        self,
        wall_position: Vec3,
        wall_scale: Vec3,
        target_position: Vec3,
        target_scale: Vec3,
    ):
        self.wall = Box.from_center(
            wall_position, np.multiply(WALL_HALF_EXTENTS, wall_scale)
        )
        self.target = Sphere(
            center=np.asarray(target_position, dtype=float),
            radius=TARGET_RADIUS * float(np.max(np.abs(target_scale))),
        )

    def rocket_box(self, rocket: Rocket) -> Box:
        return rotated_box(rocket.position, ROCKET_HALF_EXTENTS, rocket.orientation)

    def check(self, rocket: Rocket) -> CollisionOutcome:
        box = self.rocket_box(rocket)
        return CollisionOutcome(
            hit_obstacle=box.intersects_box(self.wall),
            hit_target=box.intersects_sphere(self.target),
        )
