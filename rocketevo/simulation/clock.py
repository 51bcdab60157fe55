from __future__ import annotations

from rocketevo.exceptions import ConfigurationError


class SimulationClock:
    """Fixed-step frame counter bounding each generation's rollout."""

    def __init__(self, life_time: int, dt: float):
        if life_time <= 0:
            raise ConfigurationError(f"life_time must be positive, got {life_time}")
        if dt <= 0:
            raise ConfigurationError(f"dt must be positive, got {dt}")
        self.life_time = life_time
        self.dt = dt
        self.frame = 0
        self.total_frames = 0

    def tick(self) -> bool:
        """Count one simulated frame; True once the generation's budget is spent."""
        self.frame += 1
        self.total_frames += 1
        return self.exhausted

    @property
    def exhausted(self) -> bool:
        return self.frame >= self.life_time

    @property
    def frames_left(self) -> int:
        return max(self.life_time - self.frame, 0)

    @property
    def elapsed(self) -> float:
        return self.frame * self.dt

    def reset(self) -> None:
        self.frame = 0
