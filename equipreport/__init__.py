# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from .errors import ReportError
from .reporttypes import HardwareReport, Report, ReportKind, Severity, SoftwareReport
from .store import ReportStore

__all__ = [
    "ReportStore",
    "ReportError",
    "Report",
    "ReportKind",
    "HardwareReport",
    "SoftwareReport",
    "Severity",
]
