from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from rocketevo.genome import Genome
from rocketevo.physics import Rocket, RocketParameters
from rocketevo.population import Population
from rocketevo.simulation import NO_COLLISION, CollisionOracle, CollisionOutcome
from rocketevo.utils.trackers import GenericLogger, LoggerBackend

from helpers import constant_genome

DT = 1.0 / 90.0


@pytest.fixture
def dt() -> float:
    return DT


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def params() -> RocketParameters:
    return RocketParameters(initial_mass=10.0, initial_position=(0.0, -44.0, 0.0))


@pytest.fixture
def make_rocket(params):
    def _make(genome: Genome | None = None, rocket_id: int = 0) -> Rocket:
        return Rocket(rocket_id, genome if genome is not None else constant_genome(10), params)

    return _make


@pytest.fixture
def population(params, rng) -> Population:
    return Population(num_rockets=6, life_time=20, dt=DT, params=params, rng=rng)


class ScriptedOracle(CollisionOracle):
    """Returns a fixed outcome per rocket id, no collision otherwise."""

    def __init__(self, outcomes: dict[int, CollisionOutcome] | None = None):
        self.outcomes = outcomes or {}
        self.calls: list[int] = []

    def check(self, rocket: Rocket) -> CollisionOutcome:
        self.calls.append(rocket.rocket_id)
        return self.outcomes.get(rocket.rocket_id, NO_COLLISION)


@pytest.fixture
def oracle() -> ScriptedOracle:
    return ScriptedOracle()


class RecordingBackend(LoggerBackend):
    def __init__(self):
        self.opened = False
        self.closed = False
        self.flushes = 0
        self.events: list[tuple[str, str, Any, int]] = []

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def write_scalar(self, tag, value, step, wall_time) -> None:
        self.events.append(("scalar", tag, value, step))

    def write_hist(self, tag, values, step, wall_time) -> None:
        self.events.append(("hist", tag, list(values), step))

    def write_text(self, tag, text, step, wall_time) -> None:
        self.events.append(("text", tag, text, step))

    def flush(self) -> None:
        self.flushes += 1


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def recording_writer(recording_backend) -> GenericLogger:
    return GenericLogger(recording_backend, flush_secs=float("inf"))


@pytest.fixture
def log_messages():
    from loguru import logger

    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(m.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
