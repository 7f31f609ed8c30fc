import logging
import sys
from logging import Formatter, LogRecord
from pathlib import Path
from typing import Optional, Union

from colorama import Fore, Style

logger_initialized: dict = {}


class ColorfulFormatter(Formatter):
    """Formatter that adds ANSI color codes to log messages based on their
    level.

    Attributes:
        COLORS: Dictionary mapping log levels to their corresponding color codes

    Example:
        >>> formatter = ColorfulFormatter('%(levelname)s: %(message)s')
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
    """

    COLORS = {
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT,
        'DEBUG': Fore.LIGHTGREEN_EX,
    }

    def format(self, record: LogRecord) -> str:
        log_message = super().format(record)
        return self.COLORS.get(record.levelname, '') + log_message + Fore.RESET


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    log_level: int = logging.INFO,
    file_mode: str = 'w',
) -> logging.Logger:
    """Initialize and get a logger by name with optional file output.

    Loggers are configured once per name. A logger whose name falls under an
    already initialized parent (``minisampler`` for ``minisampler.search``)
    is returned untouched so that records propagate to the parent handlers
    instead of being printed twice.

    Args:
        name: Logger name for identification and hierarchy
        log_file: Path to the log file. If provided, logs will also be
            written to this file
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG)
        file_mode: File opening mode ('w' for write, 'a' for append)

    Returns:
        A configured logging.Logger instance

    Example:
        >>> logger = get_logger('minisampler.search', 'search.log', logging.DEBUG)
        >>> logger.info('Beam search started')
    """
    if file_mode not in ('w', 'a'):
        raise ValueError("file_mode must be either 'w' or 'a'")

    logger = logging.getLogger(name)

    if name in logger_initialized:
        return logger

    for logger_name in logger_initialized:
        if name.startswith(logger_name + '.'):
            return logger

    if logger.handlers:
        logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), file_mode))

    fmt = '%(asctime)s - %(name)s.%(funcName)s:%(lineno)d - %(levelname)s - %(message)s'
    formatter = ColorfulFormatter(fmt=fmt, datefmt='%Y-%m-%d %H:%M:%S')

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)

    logger.setLevel(log_level)

    logger_initialized[name] = True

    return logger
