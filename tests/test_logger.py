"""
tests/test_logger.py
utils/logger.py — LOG_LEVEL 해석 + 핸들러 구성

실행: python -m pytest tests/test_logger.py -v
"""

import io
import logging
import os
import sys
import unittest
import uuid
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils import logger as log_module


def _fresh_name() -> str:
    return f"test_logger_{uuid.uuid4().hex[:8]}"


class TestResolveLevel(unittest.TestCase):

    def test_unset_is_info(self):
        self.assertEqual(log_module.resolve_level(None), (logging.INFO, True))
        self.assertEqual(log_module.resolve_level(""), (logging.INFO, True))

    def test_case_insensitive(self):
        self.assertEqual(log_module.resolve_level(" debug "), (logging.DEBUG, True))

    def test_unknown_falls_back_to_info(self):
        self.assertEqual(log_module.resolve_level("LOUD"), (logging.INFO, False))


class TestGetLogger(unittest.TestCase):

    def test_single_stdout_handler_no_propagation(self):
        lg = log_module.get_logger(_fresh_name(), "WARNING")
        self.assertEqual(lg.level, logging.WARNING)
        self.assertFalse(lg.propagate)
        self.assertEqual(len(lg.handlers), 1)
        self.assertIs(lg.handlers[0].stream, sys.stdout)

    def test_idempotent(self):
        """같은 이름 재호출 → 핸들러 중복 추가 안 함"""
        name = _fresh_name()
        first = log_module.get_logger(name, "INFO")
        second = log_module.get_logger(name, "DEBUG")
        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), 1)
        self.assertEqual(second.level, logging.INFO)

    def test_unknown_level_warns_once(self):
        """잘못된 LOG_LEVEL → INFO 로 동작 + 경고 1줄"""
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            lg = log_module.get_logger(_fresh_name(), "LOUD")
        self.assertEqual(lg.level, logging.INFO)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertIn("WARNING", lines[0])
        self.assertIn("LOUD", lines[0])

    def test_library_loggers_warning_only(self):
        for lib in log_module.LIBRARY_LOGGERS:
            with self.subTest(lib=lib):
                lib_logger = logging.getLogger(lib)
                self.assertEqual(lib_logger.level, logging.WARNING)
                self.assertIn(log_module.logger.handlers[0], lib_logger.handlers)
                self.assertFalse(lib_logger.propagate)

    def test_module_logger_name(self):
        self.assertEqual(log_module.logger.name, "onepiece_bot")


if __name__ == "__main__":
    unittest.main()
