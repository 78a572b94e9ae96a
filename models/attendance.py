"""
Attendance write protocol.

A submission for one class sheet and one date goes through, in order:
  1. resolve (or create) the date column
  2. re-read the roster band
  3. look up every roll number, aborting before any cell write if one is missing
  4. write all status cells in one batch
  5. start a guardian notification for each absence
  6. append one audit row per mark to the activity sheet

There is no rollback. A failed batch write means no audit rows; a failed
audit append leaves the grid written without an audit trail.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from models.errors import MissingFields, RollNumberNotFound, StoreError
from models.fields import ACTIVITY_SHEET, AUDIT_RANGE
from models.roster import index_by_roll_number
from models.utils import attendance_date, cell_label, is_absent

logger = logging.getLogger(__name__)


@dataclass
class Mark:
    roll_number: str
    status: str

    @classmethod
    def from_payload(cls, item):
        """Build a Mark from one {rollNumber, status} request entry"""
        if not isinstance(item, dict):
            raise MissingFields(['rollNumber', 'status'])
        missing = [key for key in ('rollNumber', 'status') if item.get(key) in (None, '')]
        if missing:
            raise MissingFields(missing)
        return cls(roll_number=str(item['rollNumber']), status=str(item['status']))


@dataclass
class AuditRow:
    date: str
    user: str
    roll_number: str
    name: str
    section: str
    status: str

    def to_list(self):
        return [self.date, self.user, self.roll_number, self.name, self.section, self.status]


@dataclass
class MarkResult:
    date: str
    column_index: int
    rows_updated: int
    absentees: List[str] = field(default_factory=list)


class AttendanceWriter:
    def __init__(self, store, resolver, roster_reader, dispatcher, audit_sheet=ACTIVITY_SHEET):
        self._store = store
        self._resolver = resolver
        self._roster = roster_reader
        self._dispatcher = dispatcher
        self._audit_sheet = audit_sheet

    def mark_attendance(self, class_sheet, marks, user, date=None):
        if date is None:
            date = attendance_date()

        resolution = self._resolver.resolve_column(class_sheet, date)
        column = resolution.column_index

        students = index_by_roll_number(self._roster.get_roster(class_sheet))

        placements = []
        for mark in marks:
            if mark.roll_number not in students:
                logger.warning("Roll number %s not found in '%s'; nothing written",
                               mark.roll_number, class_sheet)
                raise RollNumberNotFound(mark.roll_number)
            row_number, student = students[mark.roll_number]
            placements.append((mark, row_number, student))

        self._store.batch_write(
            class_sheet,
            [(cell_label(row_number, column), [[mark.status]]) for mark, row_number, _ in placements],
        )
        logger.info("Wrote %d attendance cells to '%s' for %s", len(placements), class_sheet, date)

        absentees = []
        for mark, _, student in placements:
            if is_absent(mark.status):
                self._dispatcher.notify_absence(student.email, student.name, date)
                absentees.append(student.roll_number)

        audit_rows = [
            AuditRow(date, user, student.roll_number, student.name, student.section, mark.status).to_list()
            for mark, _, student in placements
        ]
        try:
            self._store.append_rows(self._audit_sheet, AUDIT_RANGE, audit_rows)
        except StoreError:
            logger.error("Attendance for '%s' on %s is written but has no audit rows", class_sheet, date)
            raise
        logger.info("Appended %d audit rows to '%s'", len(audit_rows), self._audit_sheet)

        return MarkResult(date=date, column_index=column, rows_updated=len(placements), absentees=absentees)
