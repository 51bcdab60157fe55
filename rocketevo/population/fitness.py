from __future__ import annotations

from rocketevo.genome import BEST_FITNESS, WORST_FITNESS
from rocketevo.physics import Rocket

MAX_DISTANCE = 200.0
MIN_DISTANCE = 0.0


def assign_fitness(
    rocket: Rocket,
    target_position,
    max_distance: float = MAX_DISTANCE,
    min_distance: float = MIN_DISTANCE,
) -> float:
    """Score *rocket*'s rollout into its genome (lower is better) and return it.

    Frozen rockets score by outcome only; free-flying ones by their final
    distance to the target, normalised and capped at 1.
    """
    if rocket.frozen:
        fitness = BEST_FITNESS if rocket.reached_target else WORST_FITNESS
    else:
        distance = rocket.distance_to(target_position)
        fitness = min(distance / (max_distance + min_distance), WORST_FITNESS)
    rocket.genome.fitness = fitness
    return fitness
