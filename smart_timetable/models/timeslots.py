from smart_timetable.errors import ValidationError

DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]
HOURS_PER_DAY = 8
TOTAL_SLOTS = len(DAYS) * HOURS_PER_DAY  # 40


def slot_id(day, hour):
    return f"{day}-{hour}"


# Day-major order: Mon-1 .. Mon-8, Tue-1 .. Fri-8
ALL_SLOTS = tuple(slot_id(d, h) for d in DAYS for h in range(1, HOURS_PER_DAY + 1))
SLOT_INDEX = {s: i for i, s in enumerate(ALL_SLOTS)}


class TimeSlot:
    def __init__(self, day, hour):
        self.day = day      # e.g. "Mon"
        self.hour = hour    # 1..8

    @property
    def slot_id(self):
        return slot_id(self.day, self.hour)

    @property
    def label(self):
        return f"H{self.hour}"

    def __eq__(self, other):
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return (self.day, self.hour) == (other.day, other.hour)

    def __hash__(self):
        return hash((self.day, self.hour))

    def __repr__(self):
        return f"TimeSlot({self.slot_id})"


def parse_slot(text):
    """Split a canonical slot id like "Tue-3" into ("Tue", 3)."""
    if not isinstance(text, str) or text.strip() not in SLOT_INDEX:
        raise ValidationError(f"Unknown slot {text!r}", details={"slot": text})
    day, hour = text.strip().split("-")
    return day, int(hour)


def normalize_slot(text):
    day, hour = parse_slot(text)
    return slot_id(day, hour)


def sort_slots(slots):
    return sorted(slots, key=SLOT_INDEX.__getitem__)
