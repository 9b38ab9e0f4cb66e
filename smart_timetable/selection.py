"""Manual slot assignment.

A faculty is entered through a selection session: ``start_selection``
creates it uncommitted, ``toggle_slot`` picks or drops grid cells, and
``commit_selection`` writes the picks into the timetable in one step.
"""
import logging

from smart_timetable.errors import (
    ConflictError,
    IncompleteSelectionError,
    QuotaReachedError,
    SessionStateError,
    SlotOccupiedError,
    ValidationError,
)
from smart_timetable.models.faculty import Faculty
from smart_timetable.models.timeslots import TOTAL_SLOTS, normalize_slot, sort_slots

logger = logging.getLogger(__name__)


class SelectionSession:
    def __init__(self, faculty):
        self.faculty = faculty
        self.chosen = set()

    def view(self):
        return SessionView(self.faculty, sort_slots(self.chosen))


class SessionView:
    """Read-only progress of a selection, for the caller to render."""

    def __init__(self, faculty, chosen_slots):
        self.faculty = faculty
        self.chosen_slots = tuple(chosen_slots)

    @property
    def chosen_count(self):
        return len(self.chosen_slots)

    @property
    def required_hours(self):
        return self.faculty.hours

    @property
    def complete(self):
        return self.chosen_count == self.required_hours

    @property
    def progress(self):
        return f"{self.chosen_count} / {self.required_hours}"

    def __repr__(self):
        return f"SessionView({self.faculty.name}, {self.progress}, {list(self.chosen_slots)})"


class Conflict:
    def __init__(self, slot, occupant, faculty, occupant_id=None):
        self.slot = slot
        self.occupant = occupant  # None if the booked id is not a known faculty
        self.faculty = faculty
        self.occupant_id = occupant.faculty_id if occupant is not None else occupant_id

    @property
    def same_room(self):
        return self.occupant is not None and self.occupant.room == self.faculty.room

    @property
    def occupant_name(self):
        return self.occupant.name if self.occupant is not None else self.occupant_id

    def describe(self):
        if self.same_room:
            return f"Room conflict at {self.slot}: {self.occupant.name} (room {self.occupant.room})"
        if self.occupant is None:
            return f"Slot {self.slot} already assigned to {self.occupant_id}."
        return (f"Slot {self.slot} already assigned to {self.occupant.name} "
                f"(different room {self.occupant.room}).")

    def __repr__(self):
        kind = "same-room" if self.same_room else "slot-taken"
        return f"Conflict({self.slot}, {kind}, {self.occupant_name})"


def _require_text(value, field):
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError("Please fill all fields: name, subject, hours, room.", details={"field": field})
    return text


def parse_hours(value):
    if isinstance(value, bool):
        raise ValidationError("Invalid hours. Enter an integer.", details={"hours": value})
    if isinstance(value, int):
        hours = value
    else:
        text = _require_text(value, "hours")
        try:
            hours = int(text)
        except ValueError:
            raise ValidationError("Invalid hours. Enter an integer.", details={"hours": value}) from None
    if hours <= 0 or hours > TOTAL_SLOTS:
        raise ValidationError(
            "Please enter a positive hour number within reasonable bounds.",
            details={"hours": hours, "max": TOTAL_SLOTS},
        )
    return hours


def start_selection(state, name, subject, hours, room):
    if state.session is not None:
        raise SessionStateError(
            f"Already selecting for {state.session.faculty.name}; save or cancel first."
        )
    name = _require_text(name, "name")
    subject = _require_text(subject, "subject")
    room = _require_text(room, "room")
    hours = parse_hours(hours)

    faculty = Faculty(state.new_faculty_id(), name, subject, hours, room)
    state.session = SelectionSession(faculty)
    logger.info("Selection mode started for %s (needs %d slots).", name, hours)
    return state.session.view()


def _active_session(state):
    if state.session is None:
        raise SessionStateError("Not currently selecting for any faculty.")
    return state.session


def toggle_slot(state, slot):
    session = _active_session(state)
    slot = normalize_slot(slot)
    faculty = session.faculty

    if slot in session.chosen:
        session.chosen.remove(slot)
    else:
        if state.timetable.is_occupied(slot):
            error = SlotOccupiedError(slot, state.occupant(slot), state.timetable.occupant(slot))
            logger.warning(error.message)
            raise error
        if len(session.chosen) >= faculty.hours:
            raise QuotaReachedError(faculty.hours)
        session.chosen.add(slot)

    view = session.view()
    logger.info("Selecting for %s: %s chosen.", faculty.name, view.progress)
    return view


def find_conflicts(state, faculty, slots):
    conflicts = []
    for slot in sort_slots(slots):
        if state.timetable.is_occupied(slot):
            conflicts.append(Conflict(slot, state.occupant(slot), faculty, state.timetable.occupant(slot)))
    return conflicts


def commit_selection(state):
    session = _active_session(state)
    faculty = session.faculty
    if len(session.chosen) != faculty.hours:
        raise IncompleteSelectionError(len(session.chosen), faculty.hours)

    # The session may be stale if auto-generation ran since the slots were picked.
    conflicts = find_conflicts(state, faculty, session.chosen)
    if conflicts:
        logger.warning("Commit for %s rejected: %d conflict(s)", faculty.name, len(conflicts))
        raise ConflictError(conflicts)

    slots = sort_slots(session.chosen)
    for slot in slots:
        state.timetable.assign(slot, faculty.faculty_id)
    state.faculty.append(faculty)
    state.session = None
    logger.info("Saved faculty %s with slots: %s", faculty.name, slots)
    return faculty


def cancel_selection(state):
    session = _active_session(state)
    state.session = None
    logger.info("Selection for %s cancelled.", session.faculty.name)
    return session.faculty
