# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    INVALID_SEVERITY = "InvalidSeverity"
    INVALID_SERIAL_NUMBER = "InvalidSerialNumber"
    INVALID_SOFTWARE_VERSION = "InvalidSoftwareVersion"
    INVALID_DATE = "InvalidDate"
    INVALID_REPORT_KIND = "InvalidReportKind"
    EMPTY_COLLECTION = "EmptyCollection"
    STORAGE_IO_ERROR = "StorageIOError"
    EXPORT_IO_ERROR = "ExportIOError"


class ReportError(Exception):
    """Base error for everything the report core can signal.

    Attributes:
        kind (Optional[ErrorKind]): Which kind of failure this is; None for a bare ReportError
            raised without one.
        message (str): Human readable explanation, suitable for printing as-is.
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        self.message = message


class InvalidSeverity(ReportError):
    kind = ErrorKind.INVALID_SEVERITY


class InvalidSerialNumber(ReportError):
    kind = ErrorKind.INVALID_SERIAL_NUMBER


class InvalidSoftwareVersion(ReportError):
    kind = ErrorKind.INVALID_SOFTWARE_VERSION


class InvalidDate(ReportError):
    kind = ErrorKind.INVALID_DATE


class InvalidReportKind(ReportError):
    kind = ErrorKind.INVALID_REPORT_KIND


class EmptyCollection(ReportError):
    kind = ErrorKind.EMPTY_COLLECTION


class StorageIOError(ReportError):
    kind = ErrorKind.STORAGE_IO_ERROR


class ExportIOError(ReportError):
    kind = ErrorKind.EXPORT_IO_ERROR


@dataclass(frozen=True)
class Validation(Generic[T]):
    """Outcome of a validation routine: either a value or the error explaining why not.

    Callers check `ok` and decide whether to retry, report or abort; `unwrap()` is
    there for callers that prefer an exception.
    """

    value: Optional[T] = None
    error: Optional[ReportError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T) -> "Validation[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ReportError) -> "Validation[T]":
        return cls(error=error)
