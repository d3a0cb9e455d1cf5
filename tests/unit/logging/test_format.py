import logging

import pytest

from s3bridge.logging.format import AddFormattedAttributes, DefaultFormatter, short_logger_name


def _record(name, level=logging.INFO, msg="message", **extra):
    record = logging.LogRecord(name, level, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


@pytest.mark.parametrize(
    "name, expected",
    [
        ("s3bridge.s3.transport", "s3.transport"),
        ("s3bridge.s3.handlers", "s3.handlers"),
        ("urllib3.connectionpool", "urllib3"),
        ("botocore", "botocore"),
        ("s3bridgex.other", "s3bridgex"),
    ],
)
def test_short_logger_name(name, expected):
    assert short_logger_name(name) == expected


def test_add_formatted_attributes():
    record = _record("s3bridge.s3.transport", logging.WARNING)
    assert AddFormattedAttributes().filter(record)
    assert record.s3_level == "WARN"
    assert record.s3_name == "s3.transport"
    assert record.s3_resource == ""


def test_operation_records_name_their_resource():
    record = _record("s3bridge.s3.handlers", logging.DEBUG, "PUT => 200", resource="b/k")
    AddFormattedAttributes().filter(record)

    line = DefaultFormatter().format(record)
    assert line.endswith(" DEBUG s3.handlers    [b/k] : PUT => 200")
