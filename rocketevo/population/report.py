from __future__ import annotations

from pydantic import BaseModel, Field


class GenerationReport(BaseModel):
    """Summary of one scored generation, handed to telemetry sinks."""

    generation: int = Field(ge=0, description="Id of the generation just scored")
    average_fitness: float = Field(ge=0, le=1)
    best_fitness: float = Field(ge=0, le=1)
    worst_fitness: float = Field(ge=0, le=1)
    population_size: int = Field(gt=0)
    frame_budget: int = Field(gt=0, description="Frames per generation")
    reached_target: int = Field(default=0, ge=0)
    crashed: int = Field(default=0, ge=0)
    fitnesses: list[float] = Field(
        default_factory=list, description="Ranked fitness values, fittest first"
    )

    def summary(self) -> str:
        return (
            f"gen={self.generation} avg={self.average_fitness:.4f} "
            f"best={self.best_fitness:.4f} reached={self.reached_target} "
            f"crashed={self.crashed} rockets={self.population_size} "
            f"frames={self.frame_budget}"
        )
