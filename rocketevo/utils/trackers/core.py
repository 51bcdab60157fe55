from __future__ import annotations

import time
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from rocketevo.utils.trackers.base import LogWriter


def _sanitize(s: str) -> str:
    return "".join(ch if ch.isalnum() or ch in "-_.=," else "_" for ch in str(s))


def _render_tag(path: list[str], metric: str, labels: dict[str, str]) -> str:
    base = "/".join(_sanitize(x) for x in [*path, metric] if x)
    if not labels:
        return base
    return base + (
        "/"
        + ",".join(f"{_sanitize(k)}={_sanitize(v)}" for k, v in sorted(labels.items()))
    )


class _SeriesState(BaseModel):
    last_step: int = Field(default=-1)


class LoggerBackend:
    """
    Minimal adapter every backend must implement.
    write_* may buffer; flush() must push buffered data out.
    """

    def open(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def write_scalar(self, tag: str, value: float, step: int, wall_time: float) -> None:
        raise NotImplementedError

    def write_hist(self, tag: str, values: Any, step: int, wall_time: float) -> None:
        raise NotImplementedError

    def write_text(self, tag: str, text: str, step: int, wall_time: float) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        raise NotImplementedError


class GenericLogger(LogWriter):
    """Synchronous writer: renders tags, resolves steps, forwards to a backend.

    The simulation loop is single-threaded, so events go straight to the
    backend; flush() is issued at most every ``flush_secs``.
    """

    def __init__(self, backend: LoggerBackend, *, flush_secs: float = 3.0):
        self.backend = backend
        self._series: dict[str, _SeriesState] = {}
        self._closed = False
        self._flush_secs = float(flush_secs)

        self.backend.open()
        self._last_flush = time.time()

    def bind(
        self, *, path: list[str] | None = None, labels: dict[str, str] | None = None
    ) -> BoundGeneric:
        return BoundGeneric(self, path or [], labels or {})

    def scalar(self, metric: str, value: float, **kw) -> None:
        if self._closed:
            return
        tag = _render_tag(kw.get("path") or [], metric, kw.get("labels") or {})
        step = self._resolve_step(tag, kw.get("step"))
        self._write(self.backend.write_scalar, tag, float(value), step, kw)

    def hist(self, metric: str, values: Any, **kw) -> None:
        if self._closed:
            return
        tag = _render_tag(kw.get("path") or [], metric, kw.get("labels") or {})
        step = self._resolve_step(tag, kw.get("step"))
        self._write(self.backend.write_hist, tag, values, step, kw)

    def text(self, tag: str, text: str, **kw) -> None:
        if self._closed:
            return
        rendered = _render_tag(kw.get("path") or [], tag, kw.get("labels") or {})
        step = self._resolve_step(rendered, kw.get("step"))
        self._write(self.backend.write_text, rendered, text, step, kw)

    def flush(self) -> None:
        try:
            self.backend.flush()
        except Exception as e:
            logger.warning("[GenericLogger] flush failed: {}", e)
        self._last_flush = time.time()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.flush()
        finally:
            self.backend.close()

    # internals
    def _write(self, fn, tag: str, payload: Any, step: int, kw: dict[str, Any]) -> None:
        wall_time = kw.get("wall_time") or time.time()
        try:
            fn(tag, payload, step, wall_time)
        except Exception as e:
            # telemetry never stops the simulation
            logger.warning("[GenericLogger] dropped '{}': {}", tag, e)
            return
        if (wall_time - self._last_flush) >= self._flush_secs:
            self.flush()

    def _resolve_step(self, key: str, step: int | None) -> int:
        st = self._series.get(key)
        if st is None:
            st = _SeriesState()
            self._series[key] = st
        if step is not None:
            st.last_step = int(step)
        else:
            st.last_step += 1
        return st.last_step


class BoundGeneric(LogWriter):
    def __init__(self, base: GenericLogger, path: list[str], labels: dict[str, str]):
        self._base = base
        self._path = list(path)
        self._labels = dict(labels)

    def bind(
        self, *, path: list[str] | None = None, labels: dict[str, str] | None = None
    ) -> BoundGeneric:
        return BoundGeneric(
            self._base, [*self._path, *(path or [])], {**self._labels, **(labels or {})}
        )

    def scalar(self, metric: str, value: float, **kw) -> None:
        path = [*self._path, *kw.pop("path", [])]
        labels = {**self._labels, **kw.pop("labels", {})}
        self._base.scalar(metric, value, path=path, labels=labels, **kw)

    def hist(self, metric: str, values: Any, **kw) -> None:
        path = [*self._path, *kw.pop("path", [])]
        labels = {**self._labels, **kw.pop("labels", {})}
        self._base.hist(metric, values, path=path, labels=labels, **kw)

    def text(self, tag: str, text: str, **kw) -> None:
        path = [*self._path, *kw.pop("path", [])]
        labels = {**self._labels, **kw.pop("labels", {})}
        self._base.text(tag, text, path=path, labels=labels, **kw)

    def flush(self) -> None:
        self._base.flush()

    def close(self) -> None:
        self._base.close()
