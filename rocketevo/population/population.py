from __future__ import annotations

import numpy as np
from loguru import logger

from rocketevo.exceptions import ConfigurationError, EvolutionError
from rocketevo.genome import create_genome, merge_genomes, mutate_genome
from rocketevo.physics import Rocket, RocketParameters
from rocketevo.population.fitness import assign_fitness
from rocketevo.population.report import GenerationReport
from rocketevo.simulation import CollisionOracle

__all__ = ["Population"]


class Population:
    """
    Fixed-size, even population of rockets:
    - step(): one frame for every unfrozen rocket, outcomes from the oracle.
    - end_generation(): score, rank, recombine pairwise, reset.
    """

    def __init__(
        self,
        num_rockets: int,
        life_time: int,
        dt: float,
        params: RocketParameters,
        rng: np.random.Generator,
    ):
        if num_rockets <= 0 or num_rockets % 2 != 0:
            raise ConfigurationError(
                f"num_rockets must be a positive even number, got {num_rockets}"
            )
        if life_time <= 0:
            raise ConfigurationError(f"life_time must be positive, got {life_time}")

        self.life_time = life_time
        self.dt = dt
        self.params = params
        self.rng = rng
        self.generation = 0

        self.rockets: list[Rocket] = [
            Rocket(i, create_genome(dt, life_time, rng), params)
            for i in range(num_rockets)
        ]
        logger.info(
            "[Population] Init | rockets={}, life_time={}, dt={:.5f}",
            num_rockets,
            life_time,
            dt,
        )

    @property
    def size(self) -> int:
        return len(self.rockets)

    @property
    def all_frozen(self) -> bool:
        return all(r.frozen for r in self.rockets)

    @property
    def fitnesses(self) -> list[float]:
        return [r.genome.fitness for r in self.rockets]

    def step(self, oracle: CollisionOracle, dt: float | None = None) -> int:
        """Advance every unfrozen rocket one frame. Returns the number stepped."""
        dt = self.dt if dt is None else dt
        stepped = 0
        for rocket in self.rockets:
            if not rocket.step(dt):
                continue
            stepped += 1
            outcome = oracle.check(rocket)
            if outcome.hit_obstacle:
                rocket.freeze(False)
            elif outcome.hit_target:
                rocket.freeze(True)
        return stepped

    def evaluate(self, target_position) -> list[float]:
        return [assign_fitness(r, target_position) for r in self.rockets]

    def rank(self) -> None:
        """Fittest first; equal scores keep rocket id order."""
        self.rockets.sort(key=lambda r: (r.genome.fitness, r.rocket_id))

    def recombine(self, dt: float | None = None) -> None:
        """Pair the i-th fittest with the i-th weakest rocket.

        The weaker rocket inherits a crossover of both genomes, the fitter one
        a self-mutation of its own.
        """
        dt = self.dt if dt is None else dt
        n = self.size
        for i in range(n // 2):
            fitter = self.rockets[i]
            weaker = self.rockets[n - 1 - i]

            merged = merge_genomes(dt, fitter.genome, weaker.genome, self.rng)
            if merged.length != self.life_time:
                raise EvolutionError(
                    f"Crossover of rockets {fitter.rocket_id} and {weaker.rocket_id} "
                    f"produced a genome of length {merged.length}, expected {self.life_time}"
                )
            weaker.genome = merged
            fitter.genome = mutate_genome(dt, fitter.genome, self.rng)

    def reset(self) -> None:
        for rocket in self.rockets:
            rocket.reset()

    def end_generation(self, target_position, dt: float | None = None) -> GenerationReport:
        """Generation boundary: nothing flies again until every rocket is re-seeded."""
        self.evaluate(target_position)
        self.rank()

        fitnesses = self.fitnesses
        report = GenerationReport(
            generation=self.generation,
            average_fitness=float(np.mean(fitnesses)),
            best_fitness=fitnesses[0],
            worst_fitness=fitnesses[-1],
            population_size=self.size,
            frame_budget=self.life_time,
            reached_target=sum(1 for r in self.rockets if r.frozen and r.reached_target),
            crashed=sum(1 for r in self.rockets if r.frozen and not r.reached_target),
            fitnesses=fitnesses,
        )

        self.recombine(dt)
        self.reset()
        self.generation += 1

        logger.debug("[Population] Generation boundary | {}", report.summary())
        return report
