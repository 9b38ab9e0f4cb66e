"""Room double-booking detection. Read-only: never mutates the state."""
import logging
from collections import Counter

from smart_timetable.models.timeslots import ALL_SLOTS, normalize_slot

logger = logging.getLogger(__name__)


def faculties_at_slot(state, slot):
    """Faculty booked at ``slot``, each listed once, in booking order."""
    slot = normalize_slot(slot)
    result = []
    for fid in state.timetable.bookings(slot):
        faculty = state.get_faculty(fid)
        if faculty is not None and not any(f is faculty for f in result):
            result.append(faculty)
    return result


def _has_room_clash(faculties):
    rooms = Counter(f.room for f in faculties)
    return any(count > 1 for count in rooms.values())


def detect_room_conflicts(state):
    conflicts = set()
    for slot in state.timetable.occupied_slots():
        faculties = faculties_at_slot(state, slot)
        if len(faculties) > 1 and _has_room_clash(faculties):
            conflicts.add(slot)
    return conflicts


def conflict_report(state):
    """Conflicted slots in grid order, each with the faculty involved."""
    conflicts = detect_room_conflicts(state)
    report = {}
    for slot in ALL_SLOTS:
        if slot in conflicts:
            report[slot] = faculties_at_slot(state, slot)
    if report:
        for slot, faculties in report.items():
            involved = " ".join(f"{f.name}(R:{f.room})" for f in faculties)
            logger.warning("Conflict at %s involving: %s", slot, involved)
    else:
        logger.info("No room conflicts.")
    return report
