from __future__ import annotations

import numpy as np
from loguru import logger

from rocketevo.exceptions import GenomeError
from rocketevo.genome.genome import Genome

THRUST_SCALE = 250_000.0
MAX_MUTATION_CHANCE = 0.025
MUTATION_FITNESS_FLOOR = 0.025
EVEN_MERGE_CHANCE = 0.5


def random_directional_thrust(dt: float, rng: np.random.Generator) -> np.ndarray:
    """Random lateral thrust: uniform sign, magnitude in [0, 250000 * dt)."""
    sign = 1.0 if rng.random() >= 0.5 else -1.0
    magnitude = rng.random() * THRUST_SCALE * dt
    return np.array([sign * magnitude, 0.0, 0.0])


def mutation_chance(fitness: float) -> float:
    """Per-gene mutation probability; fitter genomes (lower score) mutate less."""
    return MAX_MUTATION_CHANCE * max(fitness, MUTATION_FITNESS_FLOOR)


def create_genome(dt: float, length: int, rng: np.random.Generator) -> Genome:
    if length < 0:
        raise GenomeError(f"Genome length must be non-negative, got {length}")
    thrusts = [random_directional_thrust(dt, rng) for _ in range(length)]
    return Genome(thrusts=thrusts)


def mutate_genome(dt: float, genome: Genome, rng: np.random.Generator) -> Genome:
    """Copy *genome*, replacing each gene with a fresh thrust at the mutation chance."""
    chance = mutation_chance(genome.fitness)
    thrusts = []
    for gene in genome.thrusts:
        if rng.random() < chance:
            thrusts.append(random_directional_thrust(dt, rng))
        else:
            thrusts.append(gene)
    return Genome(thrusts=thrusts)


def merge_genomes(
    dt: float, first: Genome, second: Genome, rng: np.random.Generator
) -> Genome:
    """Fitness-weighted uniform crossover of two genomes of equal length.

    The closer the two fitness scores, the closer the mix is to 50:50;
    otherwise the fitter parent dominates. Returns the empty genome when the
    lengths differ, so callers must check the result length.
    """
    if first.length != second.length:
        logger.error(
            "[merge] Incompatible genomes: lengths differ ({} != {})",
            first.length,
            second.length,
        )
        return Genome.empty()

    if first.fitness < second.fitness:
        fittest, weakest = first, second
    else:
        fittest, weakest = second, first

    if weakest.fitness == 0.0:
        # both optimal
        weaker_merge_chance = EVEN_MERGE_CHANCE
    else:
        weaker_merge_chance = EVEN_MERGE_CHANCE * (fittest.fitness / weakest.fitness)

    chance = mutation_chance(fittest.fitness)

    thrusts = []
    for fit_gene, weak_gene in zip(fittest.thrusts, weakest.thrusts):
        if rng.random() < chance:
            thrusts.append(random_directional_thrust(dt, rng))
        elif rng.random() < weaker_merge_chance:
            thrusts.append(weak_gene)
        else:
            thrusts.append(fit_gene)

    return Genome(thrusts=thrusts)
