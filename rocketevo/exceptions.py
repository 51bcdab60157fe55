class RocketEvoError(Exception):
    """Base for all rocketevo exceptions."""

    pass


class ConfigurationError(RocketEvoError):
    """Invalid simulation or population configuration."""

    pass


class GenomeError(RocketEvoError):
    """Genome construction failures."""

    pass


class SimulationError(RocketEvoError):
    """Physics rollout failures."""

    pass


class EvolutionError(RocketEvoError):
    """Generation boundary failures."""

    pass
