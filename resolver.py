"""
Precedence rules turning partially specified time values into a resolved Entry.

Both the CSV batch path and the single ad-hoc entry path end up here. Every
function is pure apart from the injected clock, which supplies "now".
"""

from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, TypeVar

from durations import parse_duration
from entry import Entry, ParsedFields
from errors import InvalidDateTimeError, MissingEndError, MissingStartError, OutOfRangeError
from format_spec import DEFAULT_DATE_FORMAT, DEFAULT_TIME_FORMAT

Clock = Callable[[], datetime]
T = TypeVar("T")

DATETIME_FORMAT = f"{DEFAULT_DATE_FORMAT} {DEFAULT_TIME_FORMAT}"
ZERO = timedelta(0)
ONE_DAY = 86400


def first_present(*candidates: Optional[T]) -> Optional[T]:
    """Return the first candidate that is not None, most specific source first."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


def parse_date_value(text: str, fmt: str, field: str = "date") -> date:
    try:
        return datetime.strptime(text, fmt).date()
    except ValueError:
        raise InvalidDateTimeError(text, fmt, field) from None


def parse_time_value(text: str, fmt: str, field: str = "time") -> time:
    try:
        return datetime.strptime(text, fmt).time()
    except ValueError:
        raise InvalidDateTimeError(text, fmt, field) from None


def shift_time(value: time, delta: timedelta) -> time:
    """Move a time of day by a signed duration, wrapping around midnight."""
    seconds = value.hour * 3600 + value.minute * 60 + value.second
    seconds = (seconds + int(delta.total_seconds())) % ONE_DAY
    hours, rest = divmod(seconds, 3600)
    return time(hours, rest // 60, rest % 60)


def select_date(row_date: Optional[date], clock: Clock) -> date:
    return row_date if row_date is not None else clock().date()


def select_start_time(row_start: Optional[time], default_start: Optional[time]) -> time:
    start = first_present(row_start, default_start)
    if start is None:
        raise MissingStartError()
    return start


def select_end_time(fields: ParsedFields, start_time: time) -> time:
    """
    Pick the end time of a row.

    An explicit end time wins and has the pause subtracted; duration is then not
    consulted. Otherwise the end is start plus duration, without pause, since
    duration is net worked time.
    """
    if fields.end_time is not None:
        return shift_time(fields.end_time, -(fields.pause or ZERO))
    if fields.duration is not None:
        return shift_time(start_time, fields.duration)
    raise MissingEndError()


def resolve_entry(
    fields: ParsedFields,
    default_start_time: Optional[time] = None,
    clock: Clock = datetime.now,
) -> Entry:
    """Resolve the values of one row into an Entry on a single calendar day."""
    day = select_date(fields.date, clock)
    start_time = select_start_time(fields.start_time, default_start_time)
    end_time = select_end_time(fields, start_time)

    return Entry(
        start=datetime.combine(day, start_time),
        end=datetime.combine(day, end_time),
    )


def parse_datetime(text: str, clock: Clock = datetime.now) -> datetime:
    """
    Parse "dd.mm.yyyy HH:MM" or a bare "HH:MM", the latter on today's date.
    """
    text = text.strip()
    if " " in text:
        try:
            return datetime.strptime(text, DATETIME_FORMAT)
        except ValueError:
            raise InvalidDateTimeError(text, DATETIME_FORMAT) from None

    return datetime.combine(clock().date(), parse_time_value(text, DEFAULT_TIME_FORMAT))


def resolve_single_entry(
    start: Optional[str] = None,
    end: Optional[str] = None,
    time_worked: Optional[str] = None,
    pause: Optional[str] = None,
    default_start: Optional[str] = None,
    default_pause: Optional[str] = None,
    clock: Clock = datetime.now,
) -> Entry:
    """
    Resolve an ad-hoc entry from command line values and configured defaults.

    Args:
        start: Start as given on the command line.
        end: End as given on the command line.
        time_worked: Net duration worked; replaces `end` and ignores the pause.
        pause: Pause duration; falls back to `default_pause`.
        default_start: Configured default start, used when `start` is missing.
        default_pause: Configured default pause.
        clock: Source of the current time, used for time-only values and as
            the end when neither `end` nor `time_worked` is given.
    """
    start_text = first_present(start, default_start)
    if start_text is None:
        raise MissingStartError()
    start_at = parse_datetime(start_text, clock)

    duration = parse_duration(time_worked) if time_worked is not None else None
    pause_text = first_present(pause, default_pause)
    pause_value = parse_duration(pause_text) if pause_text is not None else ZERO

    try:
        if duration is not None:
            end_at = start_at + duration
        elif end is not None:
            end_at = parse_datetime(end, clock) - pause_value
        else:
            end_at = clock() - pause_value
    except OverflowError:
        raise OutOfRangeError("end") from None

    return Entry(start=start_at, end=end_at)
