import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from act.core.config import START_ROOM, ActConfig, config_from_dict, load_config
from act.core.errors import ConfigError


class ConfigTests(unittest.TestCase):
    def test_defaults(self):
        cfg = config_from_dict({})
        self.assertEqual(cfg, ActConfig())
        self.assertEqual(cfg.start_room, START_ROOM)
        self.assertTrue(cfg.splash)
        self.assertEqual(cfg.splash_delay, 4.0)
        self.assertFalse(cfg.validate_references)
        self.assertIsNone(cfg.audit_path)

    def test_null_audit_section(self):
        self.assertIsNone(config_from_dict({"audit": None}).audit_path)

    def test_bad_values(self):
        bad = [
            {"splash_delay": "soon"},
            {"splash_delay": -1},
            {"splash_delay": True},
            {"splash": "no"},
            {"start_room": 3},
            {"audit": "x"},
            {"audit": {"path": 5}},
        ]
        for raw in bad:
            with self.subTest(raw=raw):
                with self.assertRaises(ConfigError):
                    config_from_dict(raw)

    def test_broken_yaml_files(self):
        for text in ("splash: [unclosed\n", "- just\n- a list\n", "splash_delay: soon\n", 'audit: "x"\n'):
            with self.subTest(text=text):
                with tempfile.TemporaryDirectory() as tmp:
                    path = Path(tmp) / "act.yaml"
                    path.write_text(text, encoding="utf-8")
                    with self.assertRaises(ConfigError):
                        load_config(str(path))

    def test_load_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "act.yaml"
            path.write_text(
                "start_room: hall\nsplash: false\nclear_on_move: false\n"
                "validate_references: true\naudit:\n  path: logs/audit.jsonl\n",
                encoding="utf-8",
            )
            cfg = load_config(str(path))

            self.assertEqual(cfg.start_room, "hall")
            self.assertFalse(cfg.splash)
            self.assertFalse(cfg.clear_on_move)
            self.assertTrue(cfg.validate_references)
            self.assertEqual(Path(cfg.audit_path), (Path(tmp) / "logs" / "audit.jsonl").resolve())

    def test_explicit_missing_path(self):
        with self.assertRaises(FileNotFoundError):
            load_config("nope/custom.yaml")

    def test_env_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "other.yaml"
            path.write_text("splash_delay: 0\n", encoding="utf-8")
            with mock.patch.dict(os.environ, {"ACT_CONFIG": str(path)}):
                cfg = load_config(None)
        self.assertEqual(cfg.splash_delay, 0.0)

    def test_no_config_found(self):
        with tempfile.TemporaryDirectory() as tmp:
            cwd = os.getcwd()
            os.chdir(tmp)
            try:
                with mock.patch.dict(os.environ, {}, clear=True):
                    cfg = load_config("act.yaml")
            finally:
                os.chdir(cwd)
        self.assertEqual(cfg, ActConfig())


if __name__ == "__main__":
    unittest.main()
