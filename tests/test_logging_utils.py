import logging
import unittest
from unittest import mock

import logging_utils
from logging_utils import log_event, set_log_level


class TestLoggingUtils(unittest.TestCase):
    def tearDown(self):
        set_log_level("INFO")

    def test_log_event_appends_fields_and_tag(self):
        with mock.patch.object(logging_utils._logger_adapter, "log") as log_mock:
            log_event("INFO", "Quaker", "Tick", n=3, dx="0.500")

        log_mock.assert_called_once_with(logging.INFO, "Tick | n=3 dx=0.500", tag="Quaker")

    def test_warn_is_an_alias_for_warning(self):
        with mock.patch.object(logging_utils._logger_adapter, "log") as log_mock:
            log_event("WARN", "Config", "Odd value")

        self.assertEqual(log_mock.call_args.args[0], logging.WARNING)

    def test_set_log_level(self):
        set_log_level("debug")
        self.assertEqual(logging_utils._logger.level, logging.DEBUG)

        set_log_level("nonsense")
        self.assertEqual(logging_utils._logger.level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
