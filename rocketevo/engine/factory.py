from __future__ import annotations

import numpy as np
from loguru import logger

from rocketevo.engine.config import SimulationConfig
from rocketevo.engine.core import EvolutionEngine
from rocketevo.engine.history import GenerationHistory
from rocketevo.population import Population
from rocketevo.simulation import BoxCollisionOracle
from rocketevo.utils.trackers import LogWriter


def resolve_target_position(
    config: SimulationConfig, rng: np.random.Generator
) -> tuple[float, float, float]:
    x, y, z = config.target_position
    if config.target_x_spread > 0:
        x = (rng.random() - 0.5) * config.target_x_spread
    return (float(x), float(y), float(z))


def build_engine(
    config: SimulationConfig, writer: LogWriter | None = None
) -> EvolutionEngine:
    """Wire generator, target, population, box oracle and history from *config*."""
    rng = np.random.default_rng(config.seed)
    target_position = resolve_target_position(config, rng)
    logger.info("[build_engine] seed={}, target={}", config.seed, target_position)

    population = Population(
        num_rockets=config.num_rockets,
        life_time=config.life_time,
        dt=config.dt,
        params=config.rocket_parameters(),
        rng=rng,
    )
    oracle = BoxCollisionOracle(
        wall_position=config.wall_position,
        wall_scale=config.wall_scale,
        target_position=target_position,
        target_scale=config.target_scale,
    )
    history = GenerationHistory(config.history_path) if config.history_path else None

    return EvolutionEngine(
        config=config,
        population=population,
        oracle=oracle,
        target_position=target_position,
        writer=writer,
        history=history,
    )
