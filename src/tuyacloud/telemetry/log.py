import sys
import logging
import structlog
from ..util.terminal_color import TerminalColorMarks

LOGGER_NAME = "tuyacloud"

bound_logging_vars = structlog.contextvars.bound_contextvars


def __reset_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        if getattr(handler, "_tuyacloud", False):
            logger.removeHandler(handler)


def __get_json_logger():
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    handler._tuyacloud = True

    logger = logging.getLogger(LOGGER_NAME)
    __reset_handlers(logger)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


def __get_text_logger():
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        f"{TerminalColorMarks.BOLD}{TerminalColorMarks.BLUE}%(name)s |{TerminalColorMarks.END} %(asctime)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler._tuyacloud = True
    __reset_handlers(logger)
    logger.addHandler(handler)
    return logger


def get_logger(format="text") -> logging.Logger:
    if format == "json":
        LOG = __get_json_logger()
    else:
        LOG = __get_text_logger()
    return LOG


# Library modules log through this; handlers are only attached by get_logger().
LOG = logging.getLogger(LOGGER_NAME)
