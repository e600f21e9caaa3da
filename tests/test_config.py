"""
Test suite for underbar's configuration and logging setup.
"""

import logging
import unittest

from underbar.config import (
    DEFAULT_LOG_LEVEL,
    UnderbarConfig,
    load_config,
    parse_bool,
    parse_level,
    setup_logger,
)


class TestLoadConfig(unittest.TestCase):
    """Test reading configuration from an environment mapping."""

    def test_defaults(self):
        config = load_config({})
        self.assertEqual(config, UnderbarConfig())
        self.assertEqual(config.log_level, DEFAULT_LOG_LEVEL)
        self.assertTrue(config.timer_daemon)

    def test_reads_environment(self):
        config = load_config(
            {"UNDERBAR_LOG_LEVEL": " debug ", "UNDERBAR_TIMER_DAEMON": "No"}
        )
        self.assertEqual(config.log_level, "DEBUG")
        self.assertFalse(config.timer_daemon)

    def test_empty_values_keep_defaults(self):
        config = load_config({"UNDERBAR_LOG_LEVEL": "", "UNDERBAR_TIMER_DAEMON": ""})
        self.assertEqual(config, UnderbarConfig())

    def test_invalid_log_level(self):
        with self.assertRaises(ValueError):
            load_config({"UNDERBAR_LOG_LEVEL": "chatty"})

    def test_invalid_boolean(self):
        with self.assertRaises(ValueError):
            load_config({"UNDERBAR_TIMER_DAEMON": "maybe"})

    def test_parse_bool(self):
        for value in ("1", "true", "YES", "On"):
            self.assertTrue(parse_bool(value, "X"))
        for value in ("0", "False", "no", "OFF"):
            self.assertFalse(parse_bool(value, "X"))

    def test_parse_level(self):
        self.assertEqual(parse_level(" info ", "X"), "INFO")
        with self.assertRaises(ValueError):
            parse_level("chatty", "X")


class TestSetupLogger(unittest.TestCase):
    """Test the on-demand logger configuration."""

    def setUp(self):
        self.name = f"underbar.test.{self.id()}"

    def tearDown(self):
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

    def test_attaches_single_handler(self):
        logger = setup_logger(self.name, level="DEBUG")
        setup_logger(self.name, level="INFO")

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

    def test_rejects_unknown_level(self):
        """A bad level fails the same way it does in load_config."""
        with self.assertRaises(ValueError):
            setup_logger(self.name, level="bogus")
        self.assertEqual(logging.getLogger(self.name).handlers, [])

    def test_level_name_is_case_insensitive(self):
        logger = setup_logger(self.name, level="debug")
        self.assertEqual(logger.level, logging.DEBUG)

    def test_package_does_not_configure_handlers_on_import(self):
        import underbar  # noqa: F401

        self.assertEqual(logging.getLogger("underbar.decorators").handlers, [])

    def test_debug_records_from_decorators(self):
        from underbar.decorators import once

        with self.assertLogs("underbar.decorators", level="DEBUG") as captured:
            once(lambda: 1)()
        self.assertTrue(any("fired" in line for line in captured.output))


if __name__ == "__main__":
    unittest.main()
