import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level : int = logging.INFO) -> None:
    """
    Configure the root logger for scripts and test sessions.

    Sets the log level, uses the format "timestamp - logger name - level - message"
    and attaches a StreamHandler that writes to stdout. The library itself never
    calls this; it only emits records through module-level loggers.

    Args:
        level (int): logging level for the root logger. Default is logging.INFO.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
