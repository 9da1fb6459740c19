# ccql/logging_config.py
"""
Logging configuration for ccql.

All loggers live under the 'ccql' namespace and write to stderr, so the
CLI can print tables and JSON on stdout untouched.

Developer Mode:
    Set environment variable: CCQL_DEV_MODE=1
    This enables:
    - DEBUG level logging, including Timer START/DONE lines
    - Module-aligned log format
"""
import logging
import os
import sys
from typing import Optional, TextIO, Union


ROOT_LOGGER = 'ccql'

_PLAIN_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
_DEV_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)-30s | %(message)s'


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors level names and Timer lines.

    Colors are only used when the target stream is a TTY.
    """

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",     # cyan
        logging.INFO: "\033[32m",      # green
        logging.WARNING: "\033[33m",   # yellow
        logging.ERROR: "\033[31m",     # red
        logging.CRITICAL: "\033[35m",  # magenta
    }
    TIMING_COLOR = "\033[2;35m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, stream: Optional[TextIO] = None):
        super().__init__(fmt, datefmt=datefmt)
        stream = stream if stream is not None else sys.stderr
        self.use_colors = hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        # Copy so file handlers still get the plain record
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            colored.levelname = f"{color}{record.levelname}{self.RESET}"

        message = record.getMessage()
        if message.startswith(("START:", "DONE:", "FAILED:")):
            message = f"{self.TIMING_COLOR}{message}{self.RESET}"
        colored.msg = message
        colored.args = ()

        return super().format(colored)


def is_dev_mode() -> bool:
    """True if CCQL_DEV_MODE is set to 1, yes, true or on."""
    return os.getenv('CCQL_DEV_MODE', '').strip().lower() in ('1', 'yes', 'true', 'on')


def resolve_level(level: Union[int, str, None]) -> Optional[int]:
    """
    Turn a level name ("info", "WARNING") or number into a logging level.

    Returns None for None or an unknown name, meaning "use the default".
    """
    if level is None or isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else None


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[str] = None,
    use_colors: bool = True,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the 'ccql' logger.

    Safe to call repeatedly; previous handlers are replaced.

    Args:
        level: Level number or name (default: WARNING, or DEBUG in dev mode)
        log_file: Optional file path for an additional uncolored log
        use_colors: Color console output when it is a TTY
        stream: Console stream (default: sys.stderr)

    Returns:
        The configured 'ccql' logger
    """
    dev_mode = is_dev_mode()
    resolved = resolve_level(level)
    if resolved is None:
        resolved = logging.DEBUG if dev_mode else logging.WARNING

    stream = stream if stream is not None else sys.stderr
    fmt = _DEV_FORMAT if dev_mode else _PLAIN_FORMAT

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(resolved)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    if use_colors:
        console_handler.setFormatter(ColoredFormatter(fmt, datefmt='%H:%M:%S', stream=stream))
    else:
        console_handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    if dev_mode:
        logger.debug("Developer mode enabled")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the 'ccql' namespace.

    Args:
        name: Short module name, e.g. 'clustering_service'
    """
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
