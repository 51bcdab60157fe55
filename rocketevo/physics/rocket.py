from __future__ import annotations

import math

import numpy as np
from pydantic import BaseModel, Field

from rocketevo.exceptions import SimulationError
from rocketevo.genome import Genome

Vec3 = tuple[float, float, float]


class RocketParameters(BaseModel):
    """Constants shared by every rocket of a population."""

    initial_mass: float = Field(default=10.0, gt=0)
    initial_position: Vec3 = Field(default=(0.0, -44.0, 0.0))
    exhaust_velocity: Vec3 = Field(
        default=(0.0, 25.0, 0.0), description="Base exhaust velocity vector"
    )
    gravity: Vec3 = Field(default=(0.0, -9.81, 0.0))
    fuel_flow_rate: float = Field(
        default=1.5, ge=0, description="Mass burnt per simulated second"
    )
    fuel_reserve_fraction: float = Field(
        default=0.25,
        ge=0,
        le=1,
        description="Fraction of the initial mass that is never burnt",
    )
    lateral_resistance: float = Field(
        default=100.0, ge=0, description="Magnitude of the force opposing drift"
    )
    lateral_epsilon: float = Field(default=1e-3, gt=0)


class Rocket:
    """A simulated rocket flying one genome per generation.

    The rocket persists across generations; only its genome and its flight
    state are replaced at each generation boundary.
    """

    def __init__(self, rocket_id: int, genome: Genome, params: RocketParameters):
        self.rocket_id = rocket_id
        self.genome = genome
        self.params = params

        self._gravity = np.array(params.gravity, dtype=float)
        self._exhaust_velocity = np.array(params.exhaust_velocity, dtype=float)
        self._initial_position = np.array(params.initial_position, dtype=float)

        self.reset()

    def reset(self) -> None:
        self.current_mass = self.params.initial_mass
        self.previous_mass = self.current_mass
        self.flight_time = 0.0
        self.net_force = np.zeros(3)
        self.frame_index = 0
        self.frozen = False
        self.reached_target = False
        self._position = self._initial_position.copy()

    @property
    def initial_mass(self) -> float:
        return self.params.initial_mass

    @property
    def position(self) -> np.ndarray:
        pos = self._position.copy()
        pos.setflags(write=False)
        return pos

    @property
    def orientation(self) -> float:
        """Tilt angle derived from the accumulated force, for renderers."""
        fx, fy = float(self.net_force[0]), float(self.net_force[1])
        if fy == 0.0:
            return 0.0 if fx == 0.0 else math.copysign(math.pi / 2, fx)
        return math.atan(fx / fy)

    def distance_to(self, point) -> float:
        delta = self._position - np.asarray(point, dtype=float)
        return math.sqrt(float(np.dot(delta, delta)))

    def step(self, dt: float) -> bool:
        """Advance the rocket by one fixed time step.

        Note that ``net_force`` accumulates over the whole rollout and the
        displacement is ``force / mass * dt**2``.
        """
        if self.frozen:
            return False

        if self.frame_index >= self.genome.length:
            raise SimulationError(
                f"Rocket {self.rocket_id} stepped past its genome "
                f"(frame {self.frame_index}, length {self.genome.length})"
            )

        # fuel burn, never below the reserve
        reserve = self.params.fuel_reserve_fraction * self.initial_mass
        if self.current_mass > reserve:
            self.current_mass = max(
                self.current_mass - self.params.fuel_flow_rate * dt, reserve
            )

        self.net_force += self._gravity * self.current_mass * dt
        self.net_force += self._upward_thrust(dt)
        self.net_force += self.genome.thrust_at(self.frame_index)
        self.net_force += self._lateral_resistance(self.net_force)

        velocity = (self.net_force / self.current_mass) * dt
        displacement = velocity * dt
        self._position += displacement

        self.previous_mass = self.current_mass
        self.flight_time += dt
        self.frame_index += 1

        return True

    def freeze(self, reached_target: bool) -> None:
        self.frozen = True
        self.reached_target = reached_target

    def _upward_thrust(self, dt: float) -> np.ndarray:
        # T = v * (dm / dt), exhaust velocity grows with flight time
        dm = abs(self.current_mass - self.previous_mass)
        if dm <= 0:
            return np.zeros(3)
        return self._exhaust_velocity * (1.0 + self.flight_time) * (dm / dt)

    def _lateral_resistance(self, force: np.ndarray) -> np.ndarray:
        resistance = np.zeros(3)
        eps = self.params.lateral_epsilon
        if abs(force[0] - eps) > eps:
            resistance[0] = -np.sign(force[0]) * self.params.lateral_resistance
        return resistance

    def __repr__(self) -> str:
        return (
            f"Rocket(id={self.rocket_id}, frame={self.frame_index}, "
            f"frozen={self.frozen}, reached_target={self.reached_target})"
        )
