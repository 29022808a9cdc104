# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from ._report import HardwareReport, Report, ReportBase, ReportKind, SoftwareReport
from ._severity import Severity

__all__ = [
    "Severity",
    "ReportKind",
    "ReportBase",
    "HardwareReport",
    "SoftwareReport",
    "Report",
]
