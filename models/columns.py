import logging
from dataclasses import dataclass
from typing import List

from models.fields import HEADER_RANGE, HEADER_ROW
from models.utils import cell_label, column_label, find_date_column

logger = logging.getLogger(__name__)


@dataclass
class ColumnResolution:
    headers: List[str]
    column_index: int
    created: bool


class DateColumnResolver:
    """
    Finds the header column for a date on a class sheet, appending a new
    date label when the date has never been recorded.

    Assumes one writer per class sheet at a time: two concurrent requests for
    the same unseen date can both append the label.
    """

    def __init__(self, store):
        self._store = store

    def resolve_column(self, class_sheet, date):
        rows = self._store.read_range(class_sheet, HEADER_RANGE)
        headers = [str(value) for value in rows[0]] if rows else []

        existing = find_date_column(headers, date)
        if existing is not None:
            logger.debug("Date %s already in '%s' at column %s", date, class_sheet, column_label(existing))
            return ColumnResolution(headers=headers, column_index=existing, created=False)

        headers.append(date)
        column_index = len(headers) - 1
        header_range = f"{cell_label(HEADER_ROW, 0)}:{cell_label(HEADER_ROW, column_index)}"
        self._store.write_range(class_sheet, header_range, [headers])
        logger.info("Created date column %s for %s on '%s'", column_label(column_index), date, class_sheet)
        return ColumnResolution(headers=headers, column_index=column_index, created=True)
