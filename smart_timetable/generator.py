"""Round-robin auto-generation of the remaining slot needs."""
import logging
import random
from collections import deque

from smart_timetable.models.timeslots import sort_slots

logger = logging.getLogger(__name__)


class GenerationReport:
    def __init__(self):
        self.assigned = 0
        self.unmet_needs = {}   # Faculty -> slots still missing
        self.nothing_to_do = False
        self.promoted = None    # in-progress faculty absorbed into the list, if any
        self.messages = []

    def note(self, message, level=logging.INFO):
        self.messages.append(message)
        logger.log(level, message)

    def __repr__(self):
        unmet = {f.name: n for f, n in self.unmet_needs.items()}
        return f"GenerationReport(assigned={self.assigned}, unmet={unmet}, nothing_to_do={self.nothing_to_do})"


def _absorb_session(state, report):
    """Book the session's still-free picks for its faculty and return that faculty."""
    session = state.session
    faculty = session.faculty
    report.note(f"Including currently-selecting faculty in auto-generation: {faculty.name}")
    for slot in sort_slots(session.chosen):
        if state.timetable.is_occupied(slot):
            report.note(
                f"Dropped selected slot {slot} for {faculty.name}: already assigned to "
                f"{state.timetable.occupant(slot)}.",
                logging.WARNING,
            )
            continue
        state.timetable.assign(slot, faculty.faculty_id)
        report.assigned += 1
    return faculty


def auto_generate(state, rng=None, absorb_selection=True):
    rng = rng or random.Random()
    report = GenerationReport()

    free_slots = state.timetable.free_slots()
    rng.shuffle(free_slots)

    targets = list(state.faculty)
    in_progress = None
    if absorb_selection and state.session is not None and not state.is_committed(state.session.faculty):
        in_progress = _absorb_session(state, report)
        targets.append(in_progress)

    need = {}
    queue = deque()
    for f in targets:
        n = f.need(state.timetable)
        if n > 0:
            need[f.faculty_id] = n
            queue.append(f)

    if not queue and in_progress is None:
        report.nothing_to_do = True
        report.note("No faculty requires additional slots. Auto-generate skipped.")
        return report

    free = deque(s for s in free_slots if not state.timetable.is_occupied(s))
    while free and queue:
        slot = free.popleft()
        faculty = queue.popleft()
        state.timetable.assign(slot, faculty.faculty_id)
        report.assigned += 1
        need[faculty.faculty_id] -= 1
        if need[faculty.faculty_id] > 0:
            queue.append(faculty)

    if in_progress is not None:
        state.faculty.append(in_progress)
        state.session = None
        report.promoted = in_progress
        report.note(f"Auto-added currently-selecting faculty to saved list: {in_progress.name}")

    for f in queue:
        report.unmet_needs[f] = need[f.faculty_id]
        report.note(
            f"Could not assign {need[f.faculty_id]} slots for {f.name}. Insufficient free slots.",
            logging.WARNING,
        )

    report.note(f"Auto-generation completed. {report.assigned} slot(s) assigned.")
    return report
