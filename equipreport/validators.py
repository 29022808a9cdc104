# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
"""Checks applied to user input before a report is built.

None of these raise; each returns a `Validation` carrying either the cleaned value or
the error describing what was wrong, so the caller decides whether to ask again.
"""
import re
from datetime import date

from equipreport.errors import (
    InvalidDate,
    InvalidReportKind,
    InvalidSerialNumber,
    InvalidSeverity,
    InvalidSoftwareVersion,
    Validation,
)
from equipreport.reporttypes import ReportKind, Severity

VERSION_PATTERN = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

YES_TOKENS = {"si", "sí", "s", "yes", "y"}


def validate_serial_number(serial_number: int) -> Validation[int]:
    if serial_number <= 0:
        return Validation.failure(
            InvalidSerialNumber("The serial number must be a positive integer")
        )
    return Validation.success(serial_number)


def parse_serial_number(text: str) -> Validation[int]:
    cleaned = (text or "").strip()
    if not INTEGER_PATTERN.fullmatch(cleaned):
        return Validation.failure(
            InvalidSerialNumber(f"Invalid serial number: {text!r}. It must be an integer")
        )
    return validate_serial_number(int(cleaned))


def validate_software_version(version: str) -> Validation[str]:
    """Checks that a version looks like A.B.C where A, B and C are non-negative integers.

    Args:
        version (str): The version text; surrounding whitespace is ignored.

    Returns:
        Validation[str]: The trimmed version, or an InvalidSoftwareVersion error.
    """
    cleaned = (version or "").strip()
    if not VERSION_PATTERN.fullmatch(cleaned):
        return Validation.failure(
            InvalidSoftwareVersion(f"Invalid version: {version!r}. Use A.B.C with numbers")
        )
    return Validation.success(cleaned)


def parse_severity(text: str) -> Validation[Severity]:
    try:
        return Validation.success(Severity.parse(text))
    except InvalidSeverity as err:
        return Validation.failure(err)


def parse_date(text: str) -> Validation[date]:
    """Parses an ISO calendar date (YYYY-MM-DD).

    Impossible dates such as 2024-13-01 or 2023-02-29 are rejected the same way as
    malformed text.
    """
    cleaned = (text or "").strip()
    if DATE_PATTERN.fullmatch(cleaned):
        try:
            return Validation.success(date.fromisoformat(cleaned))
        except ValueError:
            pass
    return Validation.failure(InvalidDate(f"Invalid date: {text!r}. Use YYYY-MM-DD"))


def parse_report_kind(text: str) -> Validation[ReportKind]:
    normalized = (text or "").strip().casefold()
    for kind in ReportKind:
        if kind.value.casefold() == normalized:
            return Validation.success(kind)
    return Validation.failure(
        InvalidReportKind(f"Invalid report type: {text!r}. Use Hardware or Software")
    )


def parse_yes_no(text: str) -> bool:
    return (text or "").strip().casefold() in YES_TOKENS
