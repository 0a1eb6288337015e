"""
Column layout specification for CSV time entries, e.g. "date:%d.%m.%Y,start_time,end_time,pause"
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from errors import EmptyFormatError, TooFewFieldsError, UnknownFieldError

DEFAULT_DATE_FORMAT = "%d.%m.%Y"
DEFAULT_TIME_FORMAT = "%H:%M"


class FieldKind(str, Enum):
    DATE = "date"
    START_TIME = "start_time"
    END_TIME = "end_time"
    DURATION = "duration"
    PAUSE = "pause"
    EMPTY = ""


DEFAULT_FORMATS = {
    FieldKind.DATE: DEFAULT_DATE_FORMAT,
    FieldKind.START_TIME: DEFAULT_TIME_FORMAT,
    FieldKind.END_TIME: DEFAULT_TIME_FORMAT,
}


class FieldDescriptor(BaseModel):
    """What one CSV column holds and, for dates and times, how to parse it."""

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    format: Optional[str] = None


def parse_format(spec: str) -> List[FieldDescriptor]:
    """
    Parse a comma separated format specification into one descriptor per column.

    Raises:
        EmptyFormatError: if the specification is blank.
        TooFewFieldsError: if it names fewer than two columns.
        UnknownFieldError: for a field name that is not recognised.
    """
    spec = spec.strip()
    if not spec:
        raise EmptyFormatError()

    fields = [field.strip() for field in spec.split(",")]
    if len(fields) < 2:
        raise TooFewFieldsError(len(fields))

    return [parse_format_field(field) for field in fields]


def parse_format_field(field: str) -> FieldDescriptor:
    """Parse a single `name` or `name:format` token."""
    name, sep, fmt = field.partition(":")

    try:
        kind = FieldKind(name.lower())
    except ValueError:
        raise UnknownFieldError(name) from None

    # Only dates and times take a format; anything after the colon is verbatim
    if kind in DEFAULT_FORMATS:
        return FieldDescriptor(kind=kind, format=fmt if sep else DEFAULT_FORMATS[kind])
    return FieldDescriptor(kind=kind)
