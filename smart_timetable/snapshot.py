"""Save/load of the faculty list and timetable.

Snapshot layout::

    {
        "faculty": [
            {"id": "F001", "name": "Dr. A", "subject": "Math", "hours": 2,
             "room": "R1", "assigned_slots": ["Mon-1", "Mon-2"]}
        ],
        "timetable": {"Mon-1": "F001", "Mon-2": "F001"}
    }
"""
import json
import logging

from smart_timetable.errors import FormatError, ValidationError
from smart_timetable.models.faculty import Faculty
from smart_timetable.models.timeslots import TOTAL_SLOTS, normalize_slot
from smart_timetable.models.timetable import Timetable

logger = logging.getLogger(__name__)

FACULTY_FIELDS = ("id", "name", "subject", "room")


def export_snapshot(state):
    return {
        "faculty": [f.as_dict(state.timetable) for f in state.faculty],
        "timetable": dict(state.timetable.items()),
    }


def _slot(value, where):
    try:
        return normalize_slot(value)
    except ValidationError:
        raise FormatError(f"{where}: invalid slot {value!r}") from None


def _parse_faculty(entry, index):
    where = f"faculty[{index}]"
    if not isinstance(entry, dict):
        raise FormatError(f"{where}: expected an object, got {type(entry).__name__}")
    for key in FACULTY_FIELDS:
        if not isinstance(entry.get(key), str) or not entry[key].strip():
            raise FormatError(f"{where}: field {key!r} must be a non-empty string")
    hours = entry.get("hours")
    if isinstance(hours, bool) or not isinstance(hours, int) or not 0 < hours <= TOTAL_SLOTS:
        raise FormatError(f"{where}: hours must be an integer between 1 and {TOTAL_SLOTS}")
    slots = entry.get("assigned_slots", [])
    if not isinstance(slots, list):
        raise FormatError(f"{where}: assigned_slots must be a list")
    faculty = Faculty(entry["id"], entry["name"], entry["subject"], hours, entry["room"])
    return faculty, [_slot(s, where) for s in slots]


def parse_snapshot(data):
    """Validate ``data`` and build (faculty list, timetable) without touching any state."""
    if not isinstance(data, dict):
        raise FormatError("Snapshot must be an object with 'faculty' and 'timetable'")
    entries = data.get("faculty")
    mapping = data.get("timetable")
    if not isinstance(entries, list) or not isinstance(mapping, dict):
        raise FormatError("Snapshot must contain a 'faculty' list and a 'timetable' object")

    faculty, claimed = [], []
    by_id = {}
    for i, entry in enumerate(entries):
        f, slots = _parse_faculty(entry, i)
        if f.faculty_id in by_id:
            raise FormatError(f"Duplicate faculty id {f.faculty_id!r}")
        by_id[f.faculty_id] = f
        faculty.append(f)
        claimed.append((f, slots))

    timetable = Timetable()
    for slot, fid in mapping.items():
        slot = _slot(slot, "timetable")
        if not isinstance(fid, str) or fid not in by_id:
            raise FormatError(f"timetable[{slot}]: unknown faculty id {fid!r}")
        timetable.add_booking(slot, fid)
    for f, slots in claimed:
        for slot in slots:
            timetable.add_booking(slot, f.faculty_id)
    return faculty, timetable


def import_snapshot(state, data):
    faculty, timetable = parse_snapshot(data)
    doubled = [s for s in timetable.occupied_slots() if len(timetable.bookings(s)) > 1]
    if doubled:
        logger.warning("Loaded snapshot books more than one faculty at: %s", doubled)
    state.replace(faculty, timetable)
    logger.info("Loaded snapshot. Faculties: %d", len(faculty))


def save_snapshot(state, path):
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(export_snapshot(state), fh, indent=2)
    logger.info("Saved to %s", path)


def load_snapshot(state, path):
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise FormatError(f"Error loading: {e}") from e
    import_snapshot(state, data)
