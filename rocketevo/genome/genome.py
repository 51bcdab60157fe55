from __future__ import annotations

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

WORST_FITNESS = 1.0
BEST_FITNESS = 0.0


class Genome(BaseModel):
    """Fixed-length sequence of per-frame directional thrusts plus a fitness score.

    Only the x component of each thrust is populated by the genetic operators.
    The thrust table is frozen on construction; offspring are always new
    genomes, so rows may be shared with a parent without copying.
    """

    thrusts: np.ndarray = Field(
        default_factory=lambda: np.zeros((0, 3)),
        description="Thrust vector per frame, shape (length, 3)",
    )
    fitness: float = Field(
        default=WORST_FITNESS,
        ge=BEST_FITNESS,
        le=WORST_FITNESS,
        description="0 = reached target, 1 = crashed or not yet evaluated",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @field_validator("thrusts", mode="before")
    @classmethod
    def _freeze_thrusts(cls, v):
        arr = np.array(v, dtype=float)
        if arr.size == 0:
            arr = arr.reshape(0, 3)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError(f"thrusts must have shape (length, 3), got {arr.shape}")
        arr.setflags(write=False)
        return arr

    @property
    def length(self) -> int:
        return int(self.thrusts.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def thrust_at(self, frame_index: int) -> np.ndarray:
        return self.thrusts[frame_index]

    @classmethod
    def empty(cls) -> Genome:
        """Degenerate zero-length genome returned by failed crossovers."""
        return cls()

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"Genome(length={self.length}, fitness={self.fitness:.4f})"
