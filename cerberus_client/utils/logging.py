"""
Logging utilities for the Cerberus client.

The library itself only attaches a NullHandler; applications and the
command-line interface call setup_logger to get console output.
"""
import logging
import sys
from typing import Optional, Union

# Nivel personalizado entre DEBUG e INFO
VERBOSE = 15

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
DEFAULT_LEVEL = logging.INFO

LOG_COLORS = {
    "DEBUG": "\033[94m",
    "VERBOSE": "\033[96m",
    "INFO": "\033[92m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[95m",
    "RESET": "\033[0m"
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to log messages in the terminal."""

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: str = DEFAULT_DATE_FORMAT,
                 use_colors: bool = True, stream=None):
        """
        Initializes the formatter.

        Args:
            fmt: Message format
            datefmt: Date format
            use_colors: If True, uses colors when the stream is a terminal
            stream: Stream the handler writes to (defaults to stderr)
        """
        super().__init__(fmt, datefmt)
        stream = stream or sys.stderr
        self.use_colors = use_colors and hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        message = super().format(record)

        if self.use_colors and levelname in LOG_COLORS:
            return f"{LOG_COLORS[levelname]}{message}{LOG_COLORS['RESET']}"
        return message


def setup_logger(name: str = "cerberus_client",
                 level: int = DEFAULT_LEVEL,
                 format_string: Optional[str] = None,
                 use_colors: bool = True,
                 propagate: bool = False) -> logging.Logger:
    """
    Configures a logger with a console handler.

    Args:
        name: Logger name
        level: Logging level
        format_string: Custom message format
        use_colors: If True, uses colors in the terminal
        propagate: If True, propagates messages to parent loggers

    Returns:
        Configured logger
    """
    if logging.getLevelName(VERBOSE) != 'VERBOSE':
        logging.addLevelName(VERBOSE, 'VERBOSE')

    logger = logging.getLogger(name)

    # Limpiar handlers existentes (incluido el NullHandler del paquete)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    logger.setLevel(level)
    logger.propagate = propagate

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ColoredFormatter(format_string or DEFAULT_FORMAT,
                                                  use_colors=use_colors,
                                                  stream=console_handler.stream))
    logger.addHandler(console_handler)

    logger.debug(f"Logger '{name}' configurado con nivel {logging.getLevelName(level)}")
    return logger


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Retrieves a logger, optionally updating its level.

    Args:
        name: Logger name
        level: Optional logging level

    Returns:
        The logger
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: Union[int, str],
                  logger_name: Optional[str] = None) -> None:
    """
    Sets the logging level for one logger or for every client logger.

    Args:
        level: Logging level (name or integer value)
        logger_name: Specific logger name (if None, affects all client loggers)
    """
    if isinstance(level, str):
        level = VERBOSE if level.upper() == 'VERBOSE' else getattr(logging, level.upper(), logging.INFO)

    if logger_name:
        logging.getLogger(logger_name).setLevel(level)
        return

    logging.getLogger("cerberus_client").setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("cerberus_client."):
            logging.getLogger(name).setLevel(level)
