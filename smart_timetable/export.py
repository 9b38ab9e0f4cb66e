import pandas as pd
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Border, PatternFill, Side

from smart_timetable.conflicts import detect_room_conflicts, faculties_at_slot
from smart_timetable.models.timeslots import DAYS, HOURS_PER_DAY, TimeSlot

GRID_SHEET = "Timetable"
FACULTY_SHEET = "Faculty"

EMPTY_COLOR = "F5F5F5"
OCCUPIED_COLOR = "AFE1E1"
SELECTED_COLOR = "78C878"
CONFLICT_COLOR = "FFA0A0"

HOUR_LABELS = [f"H{h}" for h in range(1, HOURS_PER_DAY + 1)]


def grid_slots():
    return [TimeSlot(day, hour) for day in DAYS for hour in range(1, HOURS_PER_DAY + 1)]


def slot_status(state, slot, conflicts=None):
    if conflicts is None:
        conflicts = detect_room_conflicts(state)
    if slot in conflicts:
        return "conflict"
    if state.timetable.is_occupied(slot):
        return "occupied"
    if state.session is not None and slot in state.session.chosen:
        return "selected"
    return "empty"


def _cell_text(state, slot, status):
    if status == "conflict":
        names = " / ".join(f"{f.name} (R:{f.room})" for f in faculties_at_slot(state, slot))
        return f"Conflict\n{names}"
    if status == "occupied":
        f = state.occupant(slot)
        if f is None:
            return state.timetable.occupant(slot)
        return f"{f.name}\n{f.subject}\nR:{f.room}"
    if status == "selected":
        return "Selected"
    return ""


def timetable_frame(state):
    """Hours down, days across, one cell per slot."""
    conflicts = detect_room_conflicts(state)
    grid = pd.DataFrame("", index=HOUR_LABELS, columns=DAYS)
    for ts in grid_slots():
        grid.at[ts.label, ts.day] = _cell_text(state, ts.slot_id, slot_status(state, ts.slot_id, conflicts))
    return grid


def faculty_frame(state):
    rows = []
    for f in state.faculty:
        slots = f.assigned_slots(state.timetable)
        rows.append({
            "ID": f.faculty_id,
            "Name": f.name,
            "Subject": f.subject,
            "Hours": f.hours,
            "Room": f.room,
            "Assigned": len(slots),
            "Slots": ", ".join(slots),
        })
    return pd.DataFrame(rows, columns=["ID", "Name", "Subject", "Hours", "Room", "Assigned", "Slots"])


def _autosize(ws):
    for col in ws.columns:
        max_length = 0
        column = col[0].column_letter
        for cell in col:
            if cell.value is not None:
                max_length = max(max_length, *(len(line) for line in str(cell.value).split("\n")))
        ws.column_dimensions[column].width = max_length + 2


def write_workbook(state, filename):
    with pd.ExcelWriter(filename, engine="openpyxl") as writer:
        timetable_frame(state).to_excel(writer, sheet_name=GRID_SHEET, index=True)
        faculty_frame(state).to_excel(writer, sheet_name=FACULTY_SHEET, index=False)

    wb = load_workbook(filename)
    thin = Border(left=Side(style="thin"), right=Side(style="thin"), top=Side(style="thin"), bottom=Side(style="thin"))
    colors = {
        "empty": EMPTY_COLOR,
        "occupied": OCCUPIED_COLOR,
        "selected": SELECTED_COLOR,
        "conflict": CONFLICT_COLOR,
    }
    conflicts = detect_room_conflicts(state)

    ws = wb[GRID_SHEET]
    for ts in grid_slots():
        # header row and index column offset the grid by one
        row, col = ts.hour + 1, DAYS.index(ts.day) + 2
        color = colors[slot_status(state, ts.slot_id, conflicts)]
        cell = ws.cell(row=row, column=col)
        cell.fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = thin
    for row in range(2, HOURS_PER_DAY + 2):
        ws.cell(row=row, column=1).border = thin
        ws.row_dimensions[row].height = 48

    for sheet in (GRID_SHEET, FACULTY_SHEET):
        _autosize(wb[sheet])

    wb.save(filename)
    return filename
