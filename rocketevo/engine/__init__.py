from __future__ import annotations

from rocketevo.engine.config import SimulationConfig
from rocketevo.engine.core import EvolutionEngine
from rocketevo.engine.factory import build_engine, resolve_target_position
from rocketevo.engine.history import GenerationHistory
from rocketevo.engine.metrics import EngineMetrics
