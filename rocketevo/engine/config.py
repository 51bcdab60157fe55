from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rocketevo.exceptions import ConfigurationError
from rocketevo.physics import RocketParameters, Vec3


class SimulationConfig(BaseModel):
    """Options recognised by a rocket evolution run."""

    num_rockets: int = Field(
        default=100, gt=0, description="Population size (must be even)"
    )
    life_time: int = Field(default=400, gt=0, description="Frames per generation")
    dt: float = Field(default=1.0 / 90.0, gt=0, description="Fixed time step")

    rocket_initial_position: Vec3 = Field(default=(0.0, -44.0, 0.0))
    rocket_initial_mass: float = Field(default=10.0, gt=0)
    exhaust_velocity: Vec3 = Field(default=(0.0, 25.0, 0.0))
    gravity: Vec3 = Field(default=(0.0, -9.81, 0.0))

    target_position: Vec3 = Field(default=(0.0, 35.0, 0.0))
    target_scale: Vec3 = Field(default=(2.0, 2.0, 1.0))
    target_x_spread: float = Field(
        default=0.0,
        ge=0,
        description="If > 0, target x is drawn uniformly from [-spread/2, spread/2)",
    )
    wall_position: Vec3 = Field(default=(0.0, 0.0, 0.0))
    wall_scale: Vec3 = Field(default=(40.0, 1.0, 1.0))

    seed: int | None = Field(default=None, description="Seed for the random generator")
    max_generations: int | None = Field(
        default=None, gt=0, description="Maximum number of generations (None = unlimited)"
    )
    end_on_all_frozen: bool = Field(
        default=False,
        description="End a generation early once every rocket is frozen",
    )
    history_path: Path | None = Field(
        default=None, description="JSON-lines file receiving one report per generation"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("num_rockets")
    @classmethod
    def _validate_even(cls, v: int) -> int:
        if v % 2 != 0:
            raise ValueError(f"num_rockets must be an even number, got {v}")
        return v

    @classmethod
    def build(cls, **values: Any) -> SimulationConfig:
        """Validate *values*, reporting failures as ConfigurationError."""
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    def rocket_parameters(self) -> RocketParameters:
        return RocketParameters(
            initial_mass=self.rocket_initial_mass,
            initial_position=self.rocket_initial_position,
            exhaust_velocity=self.exhaust_velocity,
            gravity=self.gravity,
        )
