from __future__ import annotations

from typing import Any

from loguru import logger
import numpy as np

from rocketevo.utils.trackers.configs import LoguruConfig
from rocketevo.utils.trackers.core import LoggerBackend


class LoguruBackend(LoggerBackend):
    """Display sink: renders each step's scalars as one log line."""

    def __init__(self, cfg: LoguruConfig | None = None):
        self.cfg = cfg or LoguruConfig()
        self._pending: dict[int, dict[str, float]] = {}

    def open(self) -> None:
        pass

    def close(self) -> None:
        self.flush()

    def write_scalar(self, tag: str, value: float, step: int, wall_time: float) -> None:
        self._pending.setdefault(step, {})[tag] = value

    def write_hist(self, tag: str, values: Any, step: int, wall_time: float) -> None:
        arr = np.asarray(values, dtype=float)
        if arr.size == 0:
            return
        logger.log(
            self.cfg.level,
            "{} {} step={} min={:.4f} median={:.4f} max={:.4f}",
            self.cfg.prefix,
            tag,
            step,
            float(arr.min()),
            float(np.median(arr)),
            float(arr.max()),
        )

    def write_text(self, tag: str, text: str, step: int, wall_time: float) -> None:
        logger.log(self.cfg.level, "{} {} step={}: {}", self.cfg.prefix, tag, step, text)

    def flush(self) -> None:
        pending, self._pending = self._pending, {}
        for step in sorted(pending):
            values = " ".join(f"{k}={v:.4g}" for k, v in pending[step].items())
            logger.log(self.cfg.level, "{} step={} {}", self.cfg.prefix, step, values)
