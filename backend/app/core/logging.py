import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Attach console (and optional file) handlers to the ``app`` logger tree."""
    logger = logging.getLogger("app")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Idempotent: app factory and tests may call this more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    path = log_file if log_file is not None else settings.LOG_FILE_PATH
    if path:
        file_handler = logging.FileHandler(path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
