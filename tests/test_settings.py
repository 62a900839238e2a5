import json
import tempfile
import unittest
from pathlib import Path

from chembalance.settings import GameSettings, load_settings, parse_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(parse_settings({}), GameSettings())

    def test_parse(self):
        settings = parse_settings({"challenges_per_game": 3, "points": [3, 2, 1], "seed": "9"})
        self.assertEqual(settings.challenges_per_game, 3)
        self.assertEqual(settings.points, (3, 2, 1))
        self.assertEqual(settings.seed, 9)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            parse_settings({"challenges_per_game": 0})
        with self.assertRaises(ValueError):
            parse_settings({"points": []})
        with self.assertRaises(ValueError):
            parse_settings({"points": [2, -1]})
        with self.assertRaises(ValueError):
            parse_settings({"timer_enabled": "false"})
        with self.assertRaises(ValueError):
            parse_settings({"timer_enabled": 0})

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "game.json"
            path.write_text(json.dumps({"challenges_per_game": 4, "timer_enabled": False}))
            settings = load_settings(path)
        self.assertEqual(settings.challenges_per_game, 4)
        self.assertFalse(settings.timer_enabled)


if __name__ == '__main__':
    unittest.main()
