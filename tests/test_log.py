import logging

from colorkey.log import setup_logging


def test_setup_logging_installs_one_handler():
    logger = setup_logging()
    handlers = list(logger.handlers)

    assert setup_logging("debug") is logger
    assert logger.handlers == handlers
    assert logger.level == logging.DEBUG


def test_setup_logging_accepts_numeric_level():
    assert setup_logging(logging.WARNING).level == logging.WARNING
