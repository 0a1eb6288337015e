import pytest

from errors import EmptyFormatError, FormatError, TooFewFieldsError, UnknownFieldError
from format_spec import FieldDescriptor, FieldKind, parse_format


def test_parse_format_with_defaults():
    descriptors = parse_format("date,start_time,end_time,pause")

    assert descriptors == [
        FieldDescriptor(kind=FieldKind.DATE, format="%d.%m.%Y"),
        FieldDescriptor(kind=FieldKind.START_TIME, format="%H:%M"),
        FieldDescriptor(kind=FieldKind.END_TIME, format="%H:%M"),
        FieldDescriptor(kind=FieldKind.PAUSE),
    ]


def test_parse_format_with_explicit_formats():
    descriptors = parse_format(" date:%Y-%m-%d , start_time:%H:%M:%S, duration ")

    assert [d.kind for d in descriptors] == [
        FieldKind.DATE,
        FieldKind.START_TIME,
        FieldKind.DURATION,
    ]
    assert descriptors[0].format == "%Y-%m-%d"
    assert descriptors[1].format == "%H:%M:%S"
    assert descriptors[2].format is None


def test_parse_format_keeps_column_order_and_empty_columns():
    descriptors = parse_format("start_time,,END_TIME,,Date")

    assert [d.kind for d in descriptors] == [
        FieldKind.START_TIME,
        FieldKind.EMPTY,
        FieldKind.END_TIME,
        FieldKind.EMPTY,
        FieldKind.DATE,
    ]


def test_parse_format_two_fields():
    assert len(parse_format("date,start_time")) == 2


@pytest.mark.parametrize("spec", ["", "   "])
def test_parse_format_rejects_empty(spec):
    with pytest.raises(EmptyFormatError):
        parse_format(spec)


def test_parse_format_rejects_single_field():
    with pytest.raises(TooFewFieldsError):
        parse_format("date")


def test_parse_format_rejects_unknown_field():
    with pytest.raises(UnknownFieldError) as excinfo:
        parse_format("date,begin:%H:%M")
    assert excinfo.value.name == "begin"
    assert isinstance(excinfo.value, FormatError)


def test_parse_format_is_repeatable():
    spec = "date:%d/%m/%Y,start_time,duration,"
    assert parse_format(spec) == parse_format(spec)
