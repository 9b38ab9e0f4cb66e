import logging
import os
import random

import pandas as pd

from smart_timetable import conflicts, export, generator, selection, snapshot
from smart_timetable.config import load_config
from smart_timetable.errors import TimetableError, ValidationError
from smart_timetable.models.timeslots import normalize_slot
from smart_timetable.state import SchedulerState

logger = logging.getLogger(__name__)

REQUEST_COLUMNS = ["Name", "Subject", "Hours", "Room"]


class Scheduler:
    """Entry point for a front end: the selection flow, auto-generation,
    conflict checks and save/load over one SchedulerState."""

    def __init__(self, state=None, seed=None, absorb_selection=True):
        self.state = state or SchedulerState()
        self.rng = random.Random(seed)
        self.absorb_selection = absorb_selection

    @classmethod
    def from_config(cls, config):
        return cls(seed=config["seed"], absorb_selection=config["absorb_selection"])

    @property
    def faculty(self):
        return tuple(self.state.faculty)

    @property
    def timetable(self):
        return self.state.timetable

    @property
    def session(self):
        return self.state.session.view() if self.state.session is not None else None

    def start_selection(self, name, subject, hours, room):
        return selection.start_selection(self.state, name, subject, hours, room)

    def toggle_slot(self, slot):
        return selection.toggle_slot(self.state, slot)

    def commit_selection(self):
        return selection.commit_selection(self.state)

    def cancel_selection(self):
        return selection.cancel_selection(self.state)

    def auto_generate(self, absorb_selection=None):
        if absorb_selection is None:
            absorb_selection = self.absorb_selection
        return generator.auto_generate(self.state, self.rng, absorb_selection)

    def check_conflicts(self):
        return conflicts.detect_room_conflicts(self.state)

    def conflict_report(self):
        return conflicts.conflict_report(self.state)

    def faculties_at_slot(self, slot):
        return conflicts.faculties_at_slot(self.state, slot)

    def slot_info(self, slot):
        """Who holds ``slot``, or None when it is empty."""
        return self.state.occupant(normalize_slot(slot))

    def reset(self):
        self.state.reset()
        logger.info("Reset done.")

    def export_snapshot(self):
        return snapshot.export_snapshot(self.state)

    def import_snapshot(self, data):
        snapshot.import_snapshot(self.state, data)

    def save_snapshot(self, path):
        snapshot.save_snapshot(self.state, path)

    def load_snapshot(self, path):
        snapshot.load_snapshot(self.state, path)

    def export_workbook(self, filename):
        return export.write_workbook(self.state, filename)


def load_faculty_requests(faculty_file):
    df = pd.read_csv(faculty_file, dtype=str).fillna("")
    missing = [c for c in REQUEST_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"{faculty_file} is missing columns: {', '.join(missing)}")
    return [
        (row["Name"], row["Subject"], row["Hours"], row["Room"])
        for _, row in df.iterrows()
    ]


def enroll_requests(scheduler, requests):
    """Run each request through selection + auto-generation; skip rows that fail validation."""
    reports = []
    for name, subject, hours, room in requests:
        try:
            scheduler.start_selection(name, subject, hours, room)
        except ValidationError as e:
            print(f"Skipping request {name!r}: {e.message}")
            continue
        reports.append(scheduler.auto_generate(absorb_selection=True))
    return reports


def main(config_path="config.json"):
    config = load_config(config_path)
    logging.basicConfig(level=config["log_level"], format="%(levelname)s %(name)s: %(message)s")
    scheduler = Scheduler.from_config(config)

    try:
        if os.path.exists(config["snapshot_file"]):
            # A saved timetable wins over the request file; only top up what is missing.
            scheduler.load_snapshot(config["snapshot_file"])
            print(f"Loaded {len(scheduler.faculty)} faculty from {config['snapshot_file']}")
            print("\n".join(scheduler.auto_generate().messages))
        elif os.path.exists(config["faculty_file"]):
            reports = enroll_requests(scheduler, load_faculty_requests(config["faculty_file"]))
            print(f"Processed {len(reports)} faculty requests from {config['faculty_file']}")
        else:
            print(f"Error: neither {config['snapshot_file']} nor {config['faculty_file']} found")
            return 1
    except TimetableError as e:
        print(f"Error: {e.message}")
        return 1

    clashes = scheduler.conflict_report()
    if clashes:
        print("\n=== ROOM CONFLICTS ===")
        for slot, faculties in clashes.items():
            print(f"Conflict at {slot} involving: " + " ".join(f"{f.name}(R:{f.room})" for f in faculties))
    else:
        print("No room conflicts detected.")

    for f in scheduler.faculty:
        missing = f.need(scheduler.timetable)
        if missing > 0:
            print(f"  {f.name}: {missing} of {f.hours} slots still unassigned")

    scheduler.save_snapshot(config["snapshot_file"])
    scheduler.export_workbook(config["output_file"])
    print(f"Timetable saved to {config['snapshot_file']} and {config['output_file']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
