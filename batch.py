"""
Batch logging of time entries read from a CSV file
"""

import logging
from datetime import datetime, time
from typing import Callable, Iterable, List, Optional, Sequence

from durations import parse_duration
from entry import Entry, ParsedFields
from errors import ColumnCountMismatchError, RowError, SubmissionError, WorktimeError
from format_spec import FieldDescriptor, FieldKind, parse_format
from hq_client import WorktimeSink
from resolver import Clock, parse_date_value, parse_time_value, resolve_entry

logger = logging.getLogger(__name__)

CSV_DELIMITER = ","


def read_row(descriptors: Sequence[FieldDescriptor], line: str) -> ParsedFields:
    """Split a line into columns and parse each one according to its descriptor."""
    columns = line.rstrip("\r\n").split(CSV_DELIMITER)
    if len(columns) != len(descriptors):
        raise ColumnCountMismatchError(len(descriptors), len(columns))

    values = {}
    for descriptor, column in zip(descriptors, columns):
        value = column.strip()
        kind = descriptor.kind

        if kind == FieldKind.DATE:
            values["date"] = parse_date_value(value, descriptor.format, kind.value)
        elif kind in (FieldKind.START_TIME, FieldKind.END_TIME):
            values[kind.value] = parse_time_value(value, descriptor.format, kind.value)
        elif kind in (FieldKind.DURATION, FieldKind.PAUSE):
            values[kind.value] = parse_duration(value)

    return ParsedFields(**values)


def parse_rows(
    descriptors: Sequence[FieldDescriptor],
    lines: Iterable[str],
    skip: int = 0,
    default_start_time: Optional[time] = None,
    clock: Clock = datetime.now,
) -> List[Entry]:
    """
    Resolve every line after the first `skip` into an Entry.

    Stops at the first bad row with a RowError carrying its 0-based index
    (counted after the skipped lines) and its 1-based line number.
    """
    entries = []
    for line_number, line in enumerate(lines, start=1):
        if line_number <= skip:
            continue

        index = line_number - skip - 1
        try:
            fields = read_row(descriptors, line)
            entries.append(resolve_entry(fields, default_start_time, clock))
        except WorktimeError as e:
            raise RowError(index, line_number, e) from e

    return entries


def submit_entries(entries: Sequence[Entry], sink: WorktimeSink) -> int:
    """
    Log entries one by one in order. Returns the number submitted.

    The first failure stops the run; earlier submissions are left as they are.
    """
    for i, entry in enumerate(entries):
        logger.info(f"[{i:>3}] Logging entry ...")
        try:
            sink.log_worktime(entry.start, entry.end)
        except Exception as e:
            raise SubmissionError(i, e) from e

    return len(entries)


def run_batch(
    spec: str,
    lines: Iterable[str],
    skip: int,
    default_start_time: Optional[time],
    sink: WorktimeSink,
    clock: Clock = datetime.now,
    preview: Optional[Callable[[List[Entry]], None]] = None,
) -> List[Entry]:
    """
    Parse the format, resolve all rows, then submit the entries to the sink.

    Nothing is submitted unless every row resolves. `preview` is called with the
    resolved entries right before submission. Returns the submitted entries.
    """
    logger.info("Parsing format ...")
    descriptors = parse_format(spec)

    logger.info("Parsing CSV entries ...")
    entries = parse_rows(descriptors, lines, skip, default_start_time, clock)

    if preview:
        preview(entries)

    logger.info("Logging working times ...")
    submit_entries(entries, sink)
    return entries
