from datetime import datetime, timezone
import time

from dotenv import load_dotenv
import hydra
from hydra.utils import instantiate
from loguru import logger
from omegaconf import DictConfig, OmegaConf

from rocketevo.config import register_resolvers
from rocketevo.engine import SimulationConfig, build_engine
from rocketevo.utils.logger_setup import setup_logger
from rocketevo.utils.trackers import LogWriter


def run_experiment(cfg: DictConfig) -> None:
    start_time = time.time()

    logger.info("=" * 80)
    logger.info("Rocket Evolution Experiment")
    logger.info("=" * 80)
    logger.info(f"Start time: {datetime.now(timezone.utc).isoformat()}")

    writer: LogWriter | None = None
    try:
        logger.info("Step 1/3: Validating configuration...")
        sim_values = OmegaConf.to_container(cfg.simulation, resolve=True)
        config = SimulationConfig.build(**sim_values)
        logger.info(f"  Rockets: {config.num_rockets}, life time: {config.life_time} frames")
        logger.info(f"  Max generations: {config.max_generations or 'unlimited'}")

        logger.info("Step 2/3: Initializing components...")
        writer = instantiate(cfg.writer)
        engine = build_engine(config, writer=writer)

        logger.info("Step 3/3: Running evolution...")
        reports = engine.run()
        if reports:
            logger.info(
                "Finished {} generations | best fitness {:.4f} (generation {})",
                len(reports),
                engine.metrics.best_fitness,
                engine.metrics.best_generation,
            )

    except KeyboardInterrupt:
        logger.info("Evolution experiment interrupted by user")
    except Exception as e:  # pylint: disable=broad-except
        logger.error(f"Evolution experiment failed: {e}")
        raise
    finally:
        if writer is not None:
            writer.close()
        duration = time.time() - start_time
        logger.info(f"Total experiment duration: {duration:.2f} seconds")
        logger.info("=" * 80)


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    load_dotenv()

    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(
        "Experiment working directory: {}.",
        hydra.core.hydra_config.HydraConfig.get().runtime.output_dir,
    )
    logger.info(f"Log file: {log_file_path}")
    run_experiment(cfg)


if __name__ == "__main__":
    register_resolvers()
    main()
