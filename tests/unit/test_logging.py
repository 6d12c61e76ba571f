from __future__ import annotations

import logging
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from typer.testing import CliRunner

from reposession import cli
from reposession.util.logging import configure_logging


def _flush_file_handlers() -> None:
    for handler in logging.getLogger("reposession").handlers:
        if isinstance(handler, logging.FileHandler):
            handler.flush()


def _close_file_handlers() -> None:
    logger = logging.getLogger("reposession")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()


class LoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        logger = logging.getLogger("reposession")
        saved_handlers, saved_level = list(logger.handlers), logger.level
        logger.handlers = []

        def restore() -> None:
            _close_file_handlers()
            logger.handlers = saved_handlers
            logger.setLevel(saved_level)

        self.addCleanup(restore)

    def test_file_logging_after_cli_invocation(self) -> None:
        result = CliRunner().invoke(cli.app, [], env={cli.CONFIG_ENVVAR: None})
        self.assertEqual(result.exit_code, 1)

        with TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "after-cli.log"
            logger = configure_logging(log_path=log_path)
            logger.info("after cli")
            _flush_file_handlers()

            self.assertIn("after cli", log_path.read_text(encoding="utf-8"))
            _close_file_handlers()

    def test_configure_logging_creates_handlers(self) -> None:
        with TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "logs" / "reposession.log"
            logger = configure_logging(log_path=log_path)
            logger.info("hello")
            _flush_file_handlers()

            self.assertTrue(log_path.exists())
            contents = log_path.read_text(encoding="utf-8")
            self.assertIn("hello", contents)
            self.assertIn("INFO reposession", contents)
            _close_file_handlers()

    def test_configure_logging_is_idempotent(self) -> None:
        with TemporaryDirectory() as tmpdir:
            log_path = Path(tmpdir) / "run.log"
            first = configure_logging(level=logging.WARNING, log_path=log_path)
            count = len(first.handlers)
            second = configure_logging(level=logging.DEBUG, log_path=log_path)

            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), count)
            self.assertEqual(second.level, logging.DEBUG)
            _close_file_handlers()

    def test_child_loggers_propagate(self) -> None:
        configure_logging(level=logging.INFO)

        with self.assertLogs("reposession", level="INFO") as logs:
            logging.getLogger("reposession.discovery.scanner").info("scanning")

        self.assertIn("scanning", logs.output[0])


if __name__ == "__main__":
    unittest.main()
