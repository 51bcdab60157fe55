from rocketevo.genome.genome import BEST_FITNESS, WORST_FITNESS, Genome
from rocketevo.genome.operators import (
    create_genome,
    merge_genomes,
    mutate_genome,
    mutation_chance,
    random_directional_thrust,
)

__all__ = [
    "BEST_FITNESS",
    "WORST_FITNESS",
    "Genome",
    "create_genome",
    "merge_genomes",
    "mutate_genome",
    "mutation_chance",
    "random_directional_thrust",
]
