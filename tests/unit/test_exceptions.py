"""Unit tests for custom exceptions."""

from nfe_report.utils.exceptions import (
    DirectoryError,
    InputError,
    NFeReportError,
    OutputError,
    ParseError,
    ReadError,
    WriteError,
)


def test_hierarchy():
    assert issubclass(DirectoryError, InputError)
    assert issubclass(ParseError, InputError)
    assert issubclass(WriteError, OutputError)
    assert issubclass(ReadError, OutputError)
    assert issubclass(InputError, NFeReportError)
    assert issubclass(OutputError, NFeReportError)


def test_details_in_message():
    error = ParseError("nota.xml", "mismatched tag")
    assert error.message == "Could not parse document: nota.xml"
    assert error.details == {"filepath": "nota.xml", "reason": "mismatched tag"}
    assert str(error) == (
        "Could not parse document: nota.xml | "
        "Details: {'filepath': 'nota.xml', 'reason': 'mismatched tag'}"
    )


def test_base_without_details():
    assert str(NFeReportError("boom")) == "boom"
