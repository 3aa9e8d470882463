"""Logger construction for the server and its uvicorn transport."""

import logging
import sys

LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def config_create_logger(application_name: str, log_level: str = "INFO") -> logging.Logger:
    """Create the application logger writing to stdout.

    The handler is attached to the root logger so uvicorn's own loggers share
    the same sink and prefix.

    Args:
        application_name: Name used in the `HTTP_SERVER_<name>` line prefix.
        log_level: Standard logging level name.

    Returns:
        logging.Logger: Logger named after the application.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt=f"HTTP_SERVER_{application_name} %(asctime)s %(filename)s:%(lineno)d: %(message)s",
            datefmt=LOG_DATE_FORMAT,
        )
    )
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    logger = logging.getLogger(application_name)
    logger.setLevel(log_level)
    return logger
