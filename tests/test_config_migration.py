import unittest

from config import (
    Config,
    CURRENT_CONFIG_VERSION,
    Pattern,
    apply_dict_to_dataclass,
    migrate_config,
    parse_config_version,
)


class TestConfigMigration(unittest.TestCase):
    def test_missing_version_sets_defaults_and_bumps(self):
        cfg = Config()
        data = {
            # version intentionally omitted to simulate legacy file
            "motion": {},
            "timing": {},
        }

        apply_dict_to_dataclass(cfg, data)
        migrate_config(cfg, data.get("version"))

        self.assertEqual(cfg.version, CURRENT_CONFIG_VERSION)
        self.assertEqual(cfg.motion.pattern, Pattern.LINEAR)
        self.assertEqual(cfg.motion.size, 1.0)
        self.assertEqual(cfg.timing.interval_s, 10.0)
        self.assertFalse(cfg.dry_run)

    def test_none_and_invalid_values_are_sanitized(self):
        cfg = Config()
        data = {
            "version": 0,
            "motion": {"pattern": None, "size": -3},
            "timing": {"interval_s": None, "signal_check_interval_s": 30},
            "dry_run": None,
            "log_level": "chatty",
        }

        apply_dict_to_dataclass(cfg, data)
        migrate_config(cfg, data.get("version"))

        self.assertEqual(cfg.motion.pattern, Pattern.LINEAR)
        self.assertEqual(cfg.motion.size, 1.0)
        self.assertEqual(cfg.timing.interval_s, 10.0)
        self.assertEqual(cfg.timing.signal_check_interval_s, 0.5)
        self.assertFalse(cfg.dry_run)
        self.assertEqual(cfg.log_level, "INFO")

    def test_preserves_custom_values(self):
        cfg = Config()
        data = {
            "version": 1,
            "motion": {"pattern": 3, "size": 40.0},
            "timing": {"interval_s": 120.0, "signal_check_interval_s": 0.1},
            "dry_run": True,
            "log_level": "debug",
        }

        apply_dict_to_dataclass(cfg, data)
        migrate_config(cfg, data.get("version"))

        self.assertEqual(cfg.motion.pattern, Pattern.STAR)
        self.assertEqual(cfg.motion.size, 40.0)
        self.assertEqual(cfg.timing.interval_s, 120.0)
        self.assertEqual(cfg.timing.signal_check_interval_s, 0.1)
        self.assertTrue(cfg.dry_run)
        self.assertEqual(cfg.log_level, "DEBUG")

    def test_non_bool_dry_run_is_rejected(self):
        for raw in ("no", "yes", 1, 0, [], {"on": True}):
            cfg = Config()
            apply_dict_to_dataclass(cfg, {"version": 1, "dry_run": raw})
            migrate_config(cfg, 1)
            self.assertIs(cfg.dry_run, False, msg=repr(raw))

    def test_bool_dry_run_is_kept(self):
        cfg = Config()
        apply_dict_to_dataclass(cfg, {"dry_run": True})
        migrate_config(cfg, 1)
        self.assertIs(cfg.dry_run, True)

    def test_parse_config_version(self):
        self.assertEqual(parse_config_version(None), 0)
        self.assertEqual(parse_config_version("3"), 3)
        self.assertEqual(parse_config_version("v2"), 0)

    def test_pattern_accepts_name(self):
        cfg = Config()
        apply_dict_to_dataclass(cfg, {"motion": {"pattern": "infinity"}})
        self.assertEqual(cfg.motion.pattern, Pattern.INFINITY)

    def test_unknown_pattern_keeps_default(self):
        cfg = Config()
        apply_dict_to_dataclass(cfg, {"motion": {"pattern": "spiral"}, "unknown_key": 1})
        self.assertEqual(cfg.motion.pattern, Pattern.LINEAR)
        self.assertFalse(hasattr(cfg, "unknown_key"))

    def test_pattern_from_name(self):
        self.assertEqual(Pattern.from_name("Square"), Pattern.SQUARE)
        with self.assertRaises(ValueError):
            Pattern.from_name("hexagon")


if __name__ == "__main__":
    unittest.main()
