import os
import sys
from pathlib import Path
import unittest
from unittest import mock

# Ensure the api package is importable when tests are run from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("JOURNAL_FILE", "/tmp/floor_designer_journal_test.log")

import config  # noqa: E402


class LoadSettingsTest(unittest.TestCase):
    def setUp(self):
        config.load_settings.cache_clear()
        self.addCleanup(config.load_settings.cache_clear)
        # Keep a developer's .env from leaking into these assertions.
        patcher = mock.patch.object(config, "load_dotenv", lambda: None)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_reads_overrides_from_environment(self):
        env = {
            "GRID_UNIT": "10",
            "COST_PER_AREA_UNIT": "1500",
            "SNAP_TO_GRID": "yes",
            "JOURNAL_FILE": "",
            "PORT": "9000",
        }
        with mock.patch.dict(os.environ, env):
            settings = config.load_settings()

        self.assertEqual(settings.grid_unit, 10.0)
        self.assertEqual(settings.cost_per_area_unit, 1500.0)
        self.assertTrue(settings.snap_to_grid)
        self.assertFalse(settings.journal_enabled)
        self.assertEqual(settings.port, 9000)

    def test_invalid_number_is_reported(self):
        with mock.patch.dict(os.environ, {"GRID_UNIT": "twenty"}):
            with self.assertRaises(RuntimeError):
                config.load_settings()

    def test_relative_journal_path_resolves_under_project(self):
        settings = config.Settings(journal_file="journals/session.log")
        self.assertEqual(
            settings.journal_path, config.PROJECT_ROOT / "journals/session.log"
        )

    def test_rejects_inverted_zoom_bounds(self):
        with self.assertRaises(RuntimeError):
            config.Settings(min_scale=2.0, max_scale=1.0)


if __name__ == "__main__":
    unittest.main()
