from rocketevo.population.fitness import MAX_DISTANCE, MIN_DISTANCE, assign_fitness
from rocketevo.population.population import Population
from rocketevo.population.report import GenerationReport

__all__ = [
    "MAX_DISTANCE",
    "MIN_DISTANCE",
    "GenerationReport",
    "Population",
    "assign_fitness",
]
