import json
import unittest
from pathlib import Path

from smart_timetable.config import DEFAULT_CONFIG, load_config
from smart_timetable.main import Scheduler
from smart_timetable.state import SchedulerState

TEST_DATA = Path(__file__).parent / "test_data"


class TestSchedulerBasics(unittest.TestCase):
    def setUp(self):
        self.sched = Scheduler(seed=1)
        self.sched.start_selection("Dr. A", "Math", 2, "R1")
        self.sched.toggle_slot("Mon-1")
        self.sched.toggle_slot("Mon-2")
        self.sched.commit_selection()

    def test_slot_info(self):
        self.assertEqual(self.sched.slot_info("Mon-1").name, "Dr. A")
        self.assertIsNone(self.sched.slot_info("Mon-3"))

    def test_reset_clears_everything(self):
        self.sched.start_selection("Dr. B", "Phys", 1, "R2")
        self.sched.reset()
        self.assertEqual(self.sched.faculty, ())
        self.assertEqual(len(self.sched.timetable), 0)
        self.assertIsNone(self.sched.session)
        self.assertEqual(self.sched.check_conflicts(), set())
        # ids start over after a reset
        self.assertEqual(self.sched.start_selection("Dr. C", "Bio", 1, "R3").faculty.faculty_id, "F001")

    def test_faculty_view_is_read_only_copy(self):
        self.assertIsInstance(self.sched.faculty, tuple)
        self.assertEqual(len(self.sched.faculty), 1)

    def test_independent_states(self):
        other = Scheduler(state=SchedulerState())
        self.assertEqual(other.faculty, ())
        self.assertIsNot(other.state, self.sched.state)


class TestConfig(unittest.TestCase):
    def setUp(self):
        TEST_DATA.mkdir(parents=True, exist_ok=True)
        self.config_file = TEST_DATA / "config_test.json"

    def tearDown(self):
        try:
            self.config_file.unlink()
        except FileNotFoundError:
            pass

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config(TEST_DATA / "no_such_config.json"), DEFAULT_CONFIG)

    def test_overrides_known_keys(self):
        self.config_file.write_text(json.dumps({"seed": 7, "absorb_selection": False, "colour": "red"}))
        config = load_config(self.config_file)
        self.assertEqual(config["seed"], 7)
        self.assertFalse(config["absorb_selection"])
        self.assertNotIn("colour", config)
        self.assertEqual(config["output_file"], DEFAULT_CONFIG["output_file"])

    def test_broken_file_gives_defaults(self):
        self.config_file.write_text("{seed: ")
        self.assertEqual(load_config(self.config_file), DEFAULT_CONFIG)

    def test_log_level_normalized(self):
        self.config_file.write_text(json.dumps({"log_level": "debug"}))
        self.assertEqual(load_config(self.config_file)["log_level"], "DEBUG")

    def test_unknown_log_level_falls_back(self):
        self.config_file.write_text(json.dumps({"log_level": "LOUD"}))
        self.assertEqual(load_config(self.config_file)["log_level"], "INFO")
        self.config_file.write_text(json.dumps({"log_level": 5}))
        self.assertEqual(load_config(self.config_file)["log_level"], "INFO")

    def test_scheduler_from_config(self):
        sched = Scheduler.from_config(dict(DEFAULT_CONFIG, seed=3, absorb_selection=False))
        self.assertFalse(sched.absorb_selection)


if __name__ == "__main__":
    unittest.main()
