"""
Error types raised while resolving and logging work time entries
"""

from typing import Optional


class WorktimeError(Exception):
    """Base class for every error the time logger reports to the user."""


class ConfigError(WorktimeError):
    """No usable configuration could be resolved."""


# Format specification errors


class FormatError(WorktimeError):
    """The column format specification is malformed."""


class EmptyFormatError(FormatError):
    def __init__(self):
        super().__init__("Format is empty.")


class TooFewFieldsError(FormatError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Format needs at least two fields separated by commata, got {count}."
        )


class UnknownFieldError(FormatError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid format field name '{name}'")


# Value parsing errors


class ParseError(WorktimeError):
    """A raw text value could not be parsed."""


class InvalidDurationError(ParseError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid duration '{text}'")


class InvalidDateTimeError(ParseError):
    def __init__(self, text: str, fmt: str, field: Optional[str] = None):
        self.text = text
        self.fmt = fmt
        self.field = field
        subject = f"{field} value" if field else "value"
        super().__init__(f"Invalid {subject} '{text}', expected format '{fmt}'")


# Resolution errors


class ResolutionError(WorktimeError):
    """The parsed values are not enough to build an entry."""


class MissingStartError(ResolutionError):
    def __init__(self):
        super().__init__("No start time has been specified.")


class MissingEndError(ResolutionError):
    def __init__(self):
        super().__init__("No end time has been specified.")


class OutOfRangeError(ResolutionError):
    def __init__(self, what: str):
        self.what = what
        super().__init__(f"The resulting {what} is out of the supported date range.")


class ColumnCountMismatchError(ResolutionError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Line column count ({actual}) does not match format column count ({expected})."
        )


# Sink and batch errors


class SinkError(WorktimeError):
    """Submitting an entry to the worktime sink failed."""


class BatchError(WorktimeError):
    """A batch run stopped; `submitted` entries reached the sink before that."""

    def __init__(self, message: str, index: int, submitted: int):
        self.index = index
        self.submitted = submitted
        super().__init__(message)


class RowError(BatchError):
    """A row failed to parse or resolve. Nothing has been submitted."""

    def __init__(self, index: int, line_number: int, error: WorktimeError):
        self.line_number = line_number
        self.error = error
        super().__init__(f"Row {index} (line {line_number}): {error}", index, 0)


class SubmissionError(BatchError):
    """The sink rejected entry `index`; all entries before it were submitted."""

    def __init__(self, index: int, error: Exception):
        self.error = error
        super().__init__(f"Entry {index} could not be logged: {error}", index, index)
