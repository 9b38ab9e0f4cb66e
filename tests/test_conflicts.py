import unittest

from smart_timetable.conflicts import conflict_report, detect_room_conflicts, faculties_at_slot
from smart_timetable.main import Scheduler
from smart_timetable.state import SchedulerState


def faculty(fid, name, room, slots, hours=2):
    return {"id": fid, "name": name, "subject": "Sub", "hours": hours, "room": room, "assigned_slots": slots}


class TestConflictDetector(unittest.TestCase):
    def test_empty_state_has_no_conflicts(self):
        self.assertEqual(detect_room_conflicts(SchedulerState()), set())

    def test_scenario_c_inconsistent_snapshot(self):
        sched = Scheduler()
        sched.import_snapshot({
            "faculty": [
                faculty("F001", "Dr. P", "R5", ["Tue-3"]),
                faculty("F002", "Dr. Q", "R5", ["Tue-3", "Wed-1"]),
            ],
            "timetable": {},
        })
        self.assertEqual(sched.check_conflicts(), {"Tue-3"})
        names = [f.name for f in sched.faculties_at_slot("Tue-3")]
        self.assertEqual(names, ["Dr. P", "Dr. Q"])

    def test_different_rooms_same_slot_is_not_a_room_conflict(self):
        state = SchedulerState()
        sched = Scheduler(state=state)
        sched.import_snapshot({
            "faculty": [faculty("F001", "Dr. P", "R5", ["Tue-3"]), faculty("F002", "Dr. Q", "R6", ["Tue-3"])],
            "timetable": {"Tue-3": "F001"},
        })
        self.assertEqual(detect_room_conflicts(state), set())
        self.assertEqual(len(faculties_at_slot(state, "Tue-3")), 2)

    def test_timetable_and_claim_for_same_faculty_count_once(self):
        sched = Scheduler()
        sched.import_snapshot({
            "faculty": [faculty("F001", "Dr. P", "R5", ["Mon-1"])],
            "timetable": {"Mon-1": "F001"},
        })
        self.assertEqual(len(sched.faculties_at_slot("Mon-1")), 1)
        self.assertEqual(sched.check_conflicts(), set())

    def test_normal_flow_never_conflicts(self):
        sched = Scheduler(seed=8)
        for name, room in [("A", "R1"), ("B", "R1"), ("C", "R1")]:
            sched.start_selection(name, "Sub", 10, room)
            sched.auto_generate()
        self.assertEqual(sched.check_conflicts(), set())

    def test_detection_is_read_only_mid_selection(self):
        sched = Scheduler()
        sched.start_selection("Dr. A", "Math", 2, "R1")
        sched.toggle_slot("Mon-1")
        before = sched.export_snapshot()
        self.assertEqual(sched.check_conflicts(), set())
        self.assertEqual(sched.export_snapshot(), before)
        self.assertEqual(sched.session.chosen_slots, ("Mon-1",))

    def test_conflict_report_in_grid_order(self):
        sched = Scheduler()
        sched.import_snapshot({
            "faculty": [
                faculty("F001", "Dr. P", "R5", ["Fri-1", "Mon-4"]),
                faculty("F002", "Dr. Q", "R5", ["Fri-1", "Mon-4"]),
            ],
            "timetable": {},
        })
        report = conflict_report(sched.state)
        self.assertEqual(list(report), ["Mon-4", "Fri-1"])
        self.assertEqual([f.faculty_id for f in report["Fri-1"]], ["F001", "F002"])


if __name__ == "__main__":
    unittest.main()
