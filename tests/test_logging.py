"""
Tests for the logging helpers.
"""
import logging

from cerberus_client.utils.logging import VERBOSE, ColoredFormatter, set_log_level, setup_logger


class TestSetupLogger:

    def test_replaces_handlers(self):
        logger = setup_logger("cerberus_client.test_setup", level=logging.DEBUG)
        logger = setup_logger("cerberus_client.test_setup", level=logging.DEBUG)

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert not logger.propagate
        assert logging.getLevelName(VERBOSE) == "VERBOSE"

    def test_no_colors_outside_terminal(self):
        record = logging.LogRecord("cerberus_client", logging.INFO, __file__, 1, "hola", None, None)
        formatter = ColoredFormatter("%(message)s", use_colors=True, stream=object())
        assert formatter.format(record) == "hola"


class TestSetLogLevel:

    def test_named_logger(self):
        set_log_level("WARNING", "cerberus_client.test_level")
        assert logging.getLogger("cerberus_client.test_level").level == logging.WARNING

    def test_all_client_loggers(self):
        child = logging.getLogger("cerberus_client.test_children")
        set_log_level("verbose")
        assert child.level == VERBOSE
        assert logging.getLogger("cerberus_client").level == VERBOSE
        set_log_level(logging.NOTSET)
