import logging
import os

from zls_gen.config import LOG_FORMAT


def setup_logging(level="INFO", log_file=None):
    """
    Set up logging configuration.

    Logs to the console and, when `log_file` is given, to that file as well.

    Args:
        level (str): Logging level name. Defaults to "INFO".
        log_file (str, optional): Path of an additional log file. Defaults to None.

    Returns:
        Logger: The package logger.
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        folder = os.path.dirname(log_file)
        if folder:
            os.makedirs(folder, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger("zls_gen")
