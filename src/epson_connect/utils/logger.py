'''
Logging configuration for the SDK.
Library modules only emit through the Loguru logger; applications (and the
command line entry point) call configure_logging() to install handlers.
'''
import sys
from pathlib import Path
from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss,SSS} {level: <8} [{file}:{line}] {message}"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    '''
    Replace the default Loguru handlers with a console handler and,
    when log_file is given, a rotating file handler.
    '''
    logger.remove()

    # Console handler
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        # File handler (10MB max, keep 5 backups)
        logger.add(
            log_file,
            rotation="10 MB",
            retention=5,
            level="DEBUG",
            format=LOG_FORMAT,
        )
