import re

from smart_timetable.models.timetable import Timetable


class SchedulerState:
    """Everything the engine mutates: the committed faculty list, the timetable
    and the (at most one) selection session in progress."""

    def __init__(self):
        self.faculty = []
        self.timetable = Timetable()
        self.session = None
        self._next_id = 1

    def new_faculty_id(self):
        fid = f"F{self._next_id:03d}"
        self._next_id += 1
        return fid

    def is_committed(self, faculty):
        return any(f is faculty for f in self.faculty)

    def get_faculty(self, faculty_id):
        for f in self.faculty:
            if f.faculty_id == faculty_id:
                return f
        if self.session is not None and self.session.faculty.faculty_id == faculty_id:
            return self.session.faculty
        return None

    def occupant(self, slot):
        fid = self.timetable.occupant(slot)
        return self.get_faculty(fid) if fid is not None else None

    def reset(self):
        self.faculty = []
        self.timetable = Timetable()
        self.session = None
        self._next_id = 1

    def replace(self, faculty, timetable):
        """Swap in a complete faculty list + timetable (snapshot load). Drops any session."""
        self.faculty = list(faculty)
        self.timetable = timetable
        self.session = None
        numbers = [int(m.group(1)) for m in (re.fullmatch(r"F(\d+)", f.faculty_id) for f in self.faculty) if m]
        self._next_id = max(numbers, default=0) + 1
