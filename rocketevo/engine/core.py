from __future__ import annotations

from loguru import logger
import numpy as np

from rocketevo.engine.config import SimulationConfig
from rocketevo.engine.history import GenerationHistory
from rocketevo.engine.metrics import EngineMetrics
from rocketevo.exceptions import EvolutionError
from rocketevo.population import GenerationReport, Population
from rocketevo.simulation import CollisionOracle, SimulationClock
from rocketevo.utils.trackers import LogWriter, NullWriter

__all__ = ["EvolutionEngine"]


class EvolutionEngine:
    """
    Frame-driven evolution loop:
    - Every frame steps the population once with the fixed dt.
    - When the frame budget is spent the population runs its generation
      boundary, and the report goes to the telemetry writer and history.
    """

    def __init__(
        self,
        config: SimulationConfig,
        population: Population,
        oracle: CollisionOracle,
        target_position,
        writer: LogWriter | None = None,
        history: GenerationHistory | None = None,
    ):
        self.config = config
        self.population = population
        self.oracle = oracle
        self.target_position = np.asarray(target_position, dtype=float)
        self.clock = SimulationClock(config.life_time, config.dt)
        self.writer = writer or NullWriter()
        self.history = history

        self._gen_writer = self.writer.bind(path=["generation"])
        self._running = False
        self.metrics = EngineMetrics()

        logger.info(
            "[EvolutionEngine] Init | rockets={}, life_time={}, oracle={}, target={}",
            population.size,
            config.life_time,
            type(oracle).__name__,
            self.target_position.round(3).tolist(),
        )

    def step_frame(self) -> GenerationReport | None:
        """One logical tick. Returns the report when a generation ended."""
        self.population.step(self.oracle, self.config.dt)
        self.metrics.frames_simulated += 1

        exhausted = self.clock.tick()
        if exhausted or (self.config.end_on_all_frozen and self.population.all_frozen):
            return self.reset_generation()
        return None

    def reset_generation(self) -> GenerationReport:
        """Generation boundary; also usable on demand mid-rollout."""
        report = self.population.end_generation(self.target_position, self.config.dt)
        self.clock.reset()
        self.metrics.record_generation(report)
        self._emit(report)
        return report

    def run(self, max_generations: int | None = None) -> list[GenerationReport]:
        cap = max_generations if max_generations is not None else self.config.max_generations
        logger.info("[EvolutionEngine] Start | max_generations={}", cap or "unlimited")

        reports: list[GenerationReport] = []
        self._running = True
        try:
            while self._running:
                if cap is not None and len(reports) >= cap:
                    logger.info("[EvolutionEngine] Stop: max_generations={}", cap)
                    break
                try:
                    report = self.step_frame()
                except Exception as exc:
                    logger.error(
                        "[EvolutionEngine] Frame failed in generation {}: {}",
                        self.population.generation,
                        exc,
                    )
                    raise EvolutionError(f"Evolution step failed: {exc}") from exc
                if report is not None:
                    reports.append(report)
        except KeyboardInterrupt:
            logger.info("[EvolutionEngine] Interrupted")
        finally:
            self._running = False
            logger.info(
                "[EvolutionEngine] Stopped | generations={}, frames={}, best={:.4f}",
                self.metrics.total_generations,
                self.metrics.frames_simulated,
                self.metrics.best_fitness,
            )
        return reports

    def stop(self) -> None:
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def _emit(self, report: GenerationReport) -> None:
        step = report.generation
        w = self._gen_writer
        w.scalar("average_fitness", report.average_fitness, step=step)
        w.scalar("best_fitness", report.best_fitness, step=step)
        w.scalar("population_size", report.population_size, step=step)
        w.scalar("frame_budget", report.frame_budget, step=step)
        w.scalar("reached_target", report.reached_target, step=step)
        w.scalar("crashed", report.crashed, step=step)
        w.hist("fitness", report.fitnesses, step=step)
        w.flush()

        if self.history is not None:
            self.history.append(report)

        logger.info("[EvolutionEngine] {}", report.summary())
