from rocketevo.utils.trackers.base import LogWriter, NullWriter
from rocketevo.utils.trackers.configs import LoguruConfig, TBConfig, WBConfig
from rocketevo.utils.trackers.core import BoundGeneric, GenericLogger, LoggerBackend


def init_tb(cfg: TBConfig, *, flush_secs: float = 3.0) -> GenericLogger:
    from rocketevo.utils.trackers.backends.tensorboard import TBBackend

    return GenericLogger(TBBackend(cfg), flush_secs=flush_secs)


def init_wandb(cfg: WBConfig, *, flush_secs: float = 3.0) -> GenericLogger:
    from rocketevo.utils.trackers.backends.wandb import WandBBackend

    return GenericLogger(WandBBackend(cfg), flush_secs=flush_secs)


def init_loguru(cfg: LoguruConfig | None = None) -> GenericLogger:
    from rocketevo.utils.trackers.backends.loguru import LoguruBackend

    # the display line is emitted on flush, once per generation by the engine
    return GenericLogger(LoguruBackend(cfg), flush_secs=float("inf"))


__all__ = [
    "BoundGeneric",
    "GenericLogger",
    "LogWriter",
    "LoggerBackend",
    "LoguruConfig",
    "NullWriter",
    "TBConfig",
    "WBConfig",
    "init_loguru",
    "init_tb",
    "init_wandb",
]
