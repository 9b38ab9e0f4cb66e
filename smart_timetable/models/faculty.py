class Faculty:
    """A teaching request: who teaches what, for how many weekly hours, in which room.

    Slots are not stored here. The timetable is the only record of which
    slots a faculty holds; ``assigned_slots`` asks it.
    """

    def __init__(self, faculty_id, name, subject, hours, room):
        self.faculty_id = faculty_id  # e.g. "F001"
        self.name = name              # e.g. "Dr. A"
        self.subject = subject        # e.g. "Math"
        self.hours = int(hours)       # required slots per week
        self.room = room              # e.g. "R1"

    def assigned_slots(self, timetable):
        return timetable.slots_for(self.faculty_id)

    def need(self, timetable):
        return self.hours - len(self.assigned_slots(timetable))

    def as_dict(self, timetable=None):
        data = {
            "id": self.faculty_id,
            "name": self.name,
            "subject": self.subject,
            "hours": self.hours,
            "room": self.room,
        }
        if timetable is not None:
            data["assigned_slots"] = list(self.assigned_slots(timetable))
        return data

    def __repr__(self):
        return (f"Faculty({self.faculty_id}, {self.name}, {self.subject}, "
                f"R:{self.room}, H:{self.hours})")
