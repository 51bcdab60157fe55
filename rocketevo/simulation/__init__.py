from rocketevo.simulation.clock import SimulationClock
from rocketevo.simulation.collision import (
    NO_COLLISION,
    Box,
    BoxCollisionOracle,
    CollisionOracle,
    CollisionOutcome,
    Sphere,
)

__all__ = [
    "NO_COLLISION",
    "Box",
    "BoxCollisionOracle",
    "CollisionOracle",
    "CollisionOutcome",
    "SimulationClock",
    "Sphere",
]
