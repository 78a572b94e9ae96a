from dataclasses import dataclass

from models.fields import FIRST_DATA_ROW, ROSTER_RANGE


@dataclass
class RosterRow:
    """One student's identity and contact record within a class sheet"""
    roll_number: str
    name: str
    email: str
    section: str

    @classmethod
    def from_cells(cls, cells):
        # The store omits trailing empty cells
        padded = (list(cells) + ['', '', '', ''])[:4]
        return cls(*(str(value) for value in padded))

    def to_list(self):
        return [self.roll_number, self.name, self.email, self.section]


class RosterReader:
    """Reads the four-column roster band of a class sheet. Never cached."""

    def __init__(self, store):
        self._store = store

    def get_roster(self, class_sheet):
        rows = self._store.read_range(class_sheet, ROSTER_RANGE)
        return [RosterRow.from_cells(cells) for cells in rows]


def index_by_roll_number(roster):
    """Map roll number -> (sheet row number, RosterRow); first occurrence wins"""
    index = {}
    for offset, student in enumerate(roster):
        index.setdefault(student.roll_number, (offset + FIRST_DATA_ROW, student))
    return index
