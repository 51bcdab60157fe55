from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal

import wandb

from rocketevo.utils.trackers.configs import WBConfig
from rocketevo.utils.trackers.core import LoggerBackend

EventKind = Literal["scalar", "hist", "text"]


@dataclass
class Event:
    step: int
    tag: str
    kind: EventKind
    value: Any


class WandBBackend(LoggerBackend):
    """Buffers events and logs them to wandb grouped by step on flush."""

    def __init__(self, cfg: WBConfig):
        self.cfg = cfg
        self._run = None
        self._buffer: List[Event] = []

    def open(self) -> None:
        self._run = wandb.init(**self.cfg.model_dump(exclude_none=True))

    def close(self) -> None:
        self.flush()
        if self._run is not None:
            self._run.finish()
        self._run = None

    def write_scalar(self, tag: str, value: float, step: int, wall_time: float) -> None:
        self._buffer.append(Event(step=step, tag=tag, kind="scalar", value=float(value)))

    def write_hist(self, tag: str, values: Any, step: int, wall_time: float) -> None:
        self._buffer.append(Event(step=step, tag=tag, kind="hist", value=list(values)))

    def write_text(self, tag: str, text: str, step: int, wall_time: float) -> None:
        self._buffer.append(Event(step=step, tag=tag, kind="text", value=text))

    def _payload(self, ev: Event) -> Any:
        if ev.kind == "hist":
            return wandb.Histogram(ev.value)
        if ev.kind == "text":
            return wandb.Html(ev.value)
        return ev.value

    def flush(self) -> None:
        if not self._buffer:
            return
        buf, self._buffer = self._buffer, []

        grouped: dict[int, dict[str, Any]] = {}
        for ev in buf:
            grouped.setdefault(ev.step, {})[ev.tag] = self._payload(ev)

        # wandb steps must be monotonic
        for step in sorted(grouped):
            wandb.log(grouped[step], step=step)
