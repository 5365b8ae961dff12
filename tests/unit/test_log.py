import logging
import sys

import pytest

from vlmatch.log import get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    root_logger.handlers = handlers
    root_logger.setLevel(level)


def test_setup_logging_replaces_handlers(restore_root_logger):
    setup_logging("debug")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.handlers[0].stream is sys.stderr


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty")
    assert restore_root_logger.level == logging.INFO


def test_get_logger_default_name():
    assert get_logger().name == "vlmatch"
    assert get_logger("vlmatch.core").name == "vlmatch.core"
