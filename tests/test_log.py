import logging

import pytest

from tuyacloud.telemetry.log import LOGGER_NAME, get_logger


def package_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_tuyacloud", False)]


@pytest.fixture(autouse=True)
def restore_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    before = list(logger.handlers)
    yield
    logger.handlers = before


def test_repeated_calls_install_one_handler() -> None:
    logger = get_logger("text")
    get_logger("text")
    get_logger("text")

    assert logger.name == "tuyacloud"
    assert logger.level == logging.INFO
    assert len(package_handlers(logger)) == 1


def test_switching_format_replaces_handler() -> None:
    get_logger("text")
    logger = get_logger("json")

    handlers = package_handlers(logger)
    assert len(handlers) == 1
    assert handlers[0].formatter.__class__.__name__ == "ProcessorFormatter"


def test_json_logger_renders_json(capsys) -> None:
    logger = get_logger("json")
    logger.info("token refreshed")

    out = capsys.readouterr().out
    assert '"event": "token refreshed"' in out
    assert '"level": "info"' in out
