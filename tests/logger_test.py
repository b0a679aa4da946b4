# -*- coding: utf-8 -*-
"""Unit test for the package logger."""
import logging
import os
import shutil
import unittest

from realtime_conversation import logger, setup_logger


class LoggerTest(unittest.TestCase):
    """
    Unit test for logger.
    """

    def setUp(self) -> None:
        """Setup for unit test."""
        self.run_dir = "./logger_runs/"
        os.makedirs(self.run_dir, exist_ok=True)

    def test_logger_to_file(self) -> None:
        """Records at or above the level are written to the file."""
        filepath = os.path.join(self.run_dir, "realtime.log")
        setup_logger(level="INFO", filepath=filepath)

        logger.debug("hidden message")
        logger.info("Connecting to %s", "wss://test")
        logger.warning("decode failure")

        for handler in logger.handlers:
            handler.flush()

        with open(filepath, "r", encoding="utf-8") as file:
            lines = file.readlines()

        self.assertEqual(len(lines), 2)
        self.assertIn("INFO", lines[0])
        self.assertIn("Connecting to wss://test", lines[0])
        self.assertIn("WARNING", lines[1])
        self.assertFalse(logger.propagate)

    def test_setup_twice(self) -> None:
        """Setting up again replaces the handlers."""
        setup_logger(level="DEBUG")
        setup_logger(level="DEBUG")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_invalid_level(self) -> None:
        """An unknown level is rejected."""
        with self.assertRaises(ValueError):
            setup_logger(level="VERBOSE")

    def tearDown(self) -> None:
        """Tear down for LoggerTest."""
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        if os.path.exists(self.run_dir):
            shutil.rmtree(self.run_dir)


if __name__ == "__main__":
    unittest.main()
