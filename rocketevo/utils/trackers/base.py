from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class LogWriter(ABC):
    @abstractmethod
    def bind(
        self, *, path: list[str] | None = None, labels: dict[str, str] | None = None
    ) -> LogWriter:
        pass

    @abstractmethod
    def scalar(self, metric: str, value: float, **kwargs) -> None:
        pass

    @abstractmethod
    def hist(self, metric: str, values: Any, **kwargs) -> None:
        pass

    @abstractmethod
    def text(self, tag: str, text: str, **kwargs) -> None:
        pass

    def flush(self) -> None:
        """Push buffered events out; writers without buffering ignore it."""

    @abstractmethod
    def close(self) -> None:
        pass


class NullWriter(LogWriter):
    """Discards everything; used when no telemetry sink is configured."""

    def bind(self, *, path=None, labels=None) -> NullWriter:
        return self

    def scalar(self, metric: str, value: float, **kwargs) -> None:
        pass

    def hist(self, metric: str, values: Any, **kwargs) -> None:
        pass

    def text(self, tag: str, text: str, **kwargs) -> None:
        pass

    def close(self) -> None:
        pass
