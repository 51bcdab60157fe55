from __future__ import annotations

from pydantic import BaseModel, Field

from rocketevo.population import GenerationReport


class EngineMetrics(BaseModel):
    """Running totals over a whole evolution run."""

    total_generations: int = Field(
        default=0, description="Total number of generation boundaries run"
    )
    frames_simulated: int = Field(
        default=0, description="Total number of frames simulated"
    )
    rockets_reached_target: int = Field(
        default=0, description="Rollouts that ended on the target"
    )
    rockets_crashed: int = Field(
        default=0, description="Rollouts that ended on the obstacle"
    )
    best_fitness: float = Field(default=1.0, description="Best fitness seen so far")
    best_generation: int | None = Field(
        default=None, description="Generation in which best_fitness was reached"
    )
    last_average_fitness: float | None = Field(default=None)

    def record_generation(self, report: GenerationReport) -> None:
        self.total_generations += 1
        self.rockets_reached_target += report.reached_target
        self.rockets_crashed += report.crashed
        self.last_average_fitness = report.average_fitness
        if self.best_generation is None or report.best_fitness < self.best_fitness:
            self.best_fitness = report.best_fitness
            self.best_generation = report.generation
