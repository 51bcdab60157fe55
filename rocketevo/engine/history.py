from __future__ import annotations

from pathlib import Path

from loguru import logger

from rocketevo.population import GenerationReport


class GenerationHistory:
    """Append-only JSON-lines log of generation reports."""

    def __init__(self, path: Path | str, *, overwrite: bool = True):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if overwrite and self.path.exists():
            self.path.unlink()
        logger.info("[GenerationHistory] Writing to {}", self.path)

    def append(self, report: GenerationReport) -> None:
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(report.model_dump_json() + "\n")

    @staticmethod
    def load(path: Path | str) -> list[GenerationReport]:
        reports = []
        with Path(path).open(encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if line:
                    reports.append(GenerationReport.model_validate_json(line))
        return reports
