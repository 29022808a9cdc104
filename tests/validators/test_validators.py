# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from datetime import date

import pytest

from equipreport.errors import ErrorKind, InvalidSerialNumber, ReportError
from equipreport.reporttypes import ReportKind, Severity
from equipreport.validators import (
    parse_date,
    parse_report_kind,
    parse_serial_number,
    parse_severity,
    parse_yes_no,
    validate_serial_number,
    validate_software_version,
)


@pytest.mark.parametrize("serial", [1, 2, 12345, 2**31])
def test_valid_serial_numbers(serial):
    result = validate_serial_number(serial)
    assert result.ok
    assert result.value == serial


@pytest.mark.parametrize("serial", [0, -1, -12345])
def test_invalid_serial_numbers(serial):
    result = validate_serial_number(serial)
    assert not result.ok
    assert result.error.kind == ErrorKind.INVALID_SERIAL_NUMBER


def test_parse_serial_number():
    assert parse_serial_number(" 42 ").value == 42
    for text in ["abc", "", "4.2", "0", "-3"]:
        assert parse_serial_number(text).error.kind == ErrorKind.INVALID_SERIAL_NUMBER


def test_unwrap_raises_carried_error():
    with pytest.raises(InvalidSerialNumber):
        validate_serial_number(0).unwrap()
    assert validate_serial_number(7).unwrap() == 7


def test_error_kind_defaults():
    assert ReportError("plain").kind is None
    assert ReportError("tagged", ErrorKind.INVALID_DATE).kind == ErrorKind.INVALID_DATE
    assert InvalidSerialNumber("bad").kind == ErrorKind.INVALID_SERIAL_NUMBER


@pytest.mark.parametrize("version", ["1.2.3", "0.0.0", "10.20.30", " 2.3.1 "])
def test_valid_versions(version):
    result = validate_software_version(version)
    assert result.ok
    assert result.value == version.strip()


@pytest.mark.parametrize("version", ["1.2", "1.2.a", "1.2.3.4", "v1.2.3", "1..3", "", "1.2.3-beta"])
def test_invalid_versions(version):
    result = validate_software_version(version)
    assert not result.ok
    assert result.error.kind == ErrorKind.INVALID_SOFTWARE_VERSION


def test_parse_severity_wraps_failure():
    assert parse_severity("Alto").value is Severity.HIGH
    result = parse_severity("urgent")
    assert result.error.kind == ErrorKind.INVALID_SEVERITY


def test_parse_date():
    assert parse_date("2025-05-18").value == date(2025, 5, 18)
    assert parse_date(" 2024-02-29 ").value == date(2024, 2, 29)


@pytest.mark.parametrize("text", ["2024-13-01", "2023-02-29", "18/05/2025", "2025-5-18", "20250518", ""])
def test_parse_invalid_date(text):
    assert parse_date(text).error.kind == ErrorKind.INVALID_DATE


def test_parse_report_kind():
    assert parse_report_kind(" hardware ").value is ReportKind.HARDWARE
    assert parse_report_kind("SOFTWARE").value is ReportKind.SOFTWARE
    assert parse_report_kind("firmware").error.kind == ErrorKind.INVALID_REPORT_KIND


def test_parse_yes_no():
    assert parse_yes_no("Si")
    assert parse_yes_no(" s ")
    assert parse_yes_no("yes")
    assert not parse_yes_no("No")
    assert not parse_yes_no("")
