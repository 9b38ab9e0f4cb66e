class TimetableError(Exception):
    """Base class for all scheduling errors reported back to the caller."""
    def __init__(self, message, details=None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TimetableError):
    """Raised for bad form input: empty fields, non-integer or out-of-range hours, unknown slots."""


class SessionStateError(TimetableError):
    """Raised when an operation is not valid in the current selection state."""


class SlotOccupiedError(TimetableError):
    def __init__(self, slot, occupant, occupant_id=None):
        self.slot = slot
        self.occupant = occupant
        # occupant is None when the booking names an id missing from the faculty list
        if occupant is not None:
            occupant_id = occupant.faculty_id
            who = f"{occupant.name} ({occupant.room})"
        else:
            who = occupant_id
        super().__init__(
            f"Slot {slot} already occupied by {who}",
            details={"slot": slot, "faculty_id": occupant_id},
        )


class QuotaReachedError(TimetableError):
    def __init__(self, required):
        self.required = required
        super().__init__(
            f"You've already selected the required number of slots ({required}).",
            details={"required": required},
        )


class IncompleteSelectionError(TimetableError):
    def __init__(self, chosen, required):
        self.chosen = chosen
        self.required = required
        super().__init__(
            f"You must select exactly {required} slots. Currently selected: {chosen}",
            details={"chosen": chosen, "required": required},
        )


class ConflictError(TimetableError):
    """Raised by commit when chosen slots collide with the timetable. Carries every conflict found."""
    def __init__(self, conflicts):
        self.conflicts = list(conflicts)
        message = "Conflicts found:\n" + "\n".join(c.describe() for c in self.conflicts)
        super().__init__(message, details={"slots": [c.slot for c in self.conflicts]})


class FormatError(TimetableError):
    """Raised when a snapshot is malformed or has mismatched types."""
