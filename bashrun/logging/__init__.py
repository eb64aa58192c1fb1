from pathlib import Path

from logly import logger


def init_logger(level: str = "INFO", log_dir: str | Path | None = None):
    """Initialize the logger.

    Console output is always enabled. When `log_dir` is given, a rotating
    `bashrun.log` file sink is added there.

    """
    logger.configure(
        level=level,
        color=True,
        console=True,
        auto_sink=True,
    )

    if log_dir is not None:
        logger.add(f"{Path(log_dir)}/bashrun.log", size_limit="10MB", retention=3)

    logger.debug("logger initialized")

    return logger
