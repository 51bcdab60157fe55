from rocketevo.genome import Genome


def constant_genome(length: int, x: float = 0.0, fitness: float = 1.0) -> Genome:
    return Genome(thrusts=[[x, 0.0, 0.0]] * length, fitness=fitness)


def ramp_genome(length: int, offset: float = 0.0, fitness: float = 1.0) -> Genome:
    return Genome(
        thrusts=[[offset + i, 0.0, 0.0] for i in range(length)], fitness=fitness
    )


class SequenceRng:
    """Stand-in generator cycling through fixed uniform draws."""

    def __init__(self, *values: float):
        self.values = list(values)
        self._i = 0

    def random(self) -> float:
        value = self.values[self._i % len(self.values)]
        self._i += 1
        return value
