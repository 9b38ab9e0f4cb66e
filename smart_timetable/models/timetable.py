from smart_timetable.models.timeslots import ALL_SLOTS, SLOT_INDEX, sort_slots


class Timetable:
    """Slot -> faculty id store. The one place that knows which slot is taken.

    Every engine operation goes through ``assign``, which refuses a second
    faculty on a slot. ``add_booking`` is only for loading external data,
    where a slot may arrive already claimed twice; those extra bookings
    are kept so the conflict detector can see them.
    """

    def __init__(self):
        self._bookings = {}  # slot -> [faculty_id, ...]

    def assign(self, slot, faculty_id):
        if self._bookings.get(slot):
            raise ValueError(f"Slot {slot} is already assigned to {self._bookings[slot][0]}")
        self._bookings[slot] = [faculty_id]

    def add_booking(self, slot, faculty_id):
        ids = self._bookings.setdefault(slot, [])
        if faculty_id not in ids:
            ids.append(faculty_id)

    def occupant(self, slot):
        ids = self._bookings.get(slot)
        return ids[0] if ids else None

    def bookings(self, slot):
        return tuple(self._bookings.get(slot, ()))

    def is_occupied(self, slot):
        return bool(self._bookings.get(slot))

    def slots_for(self, faculty_id):
        return tuple(sort_slots(s for s, ids in self._bookings.items() if faculty_id in ids))

    def occupied_slots(self):
        return [s for s in ALL_SLOTS if self.is_occupied(s)]

    def free_slots(self):
        return [s for s in ALL_SLOTS if not self.is_occupied(s)]

    def items(self):
        """(slot, occupant id) pairs in grid order; the canonical slot -> faculty view."""
        for slot in sorted(self._bookings, key=SLOT_INDEX.__getitem__):
            if self._bookings[slot]:
                yield slot, self._bookings[slot][0]

    def __contains__(self, slot):
        return self.is_occupied(slot)

    def __len__(self):
        return sum(1 for ids in self._bookings.values() if ids)

    def __repr__(self):
        return f"Timetable({dict(self.items())})"
