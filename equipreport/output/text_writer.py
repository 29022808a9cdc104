# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from datetime import datetime
from typing import Iterable, List, TextIO

from equipreport.reporttypes import HardwareReport, Report, ReportKind, SoftwareReport

FIELD_SEPARATOR = " - "
YES_NO = ("Si", "No")


def report_fields(report: Report) -> List[str]:
    """Returns every field of a report as display text, in the variant's declared order."""
    common = [
        report.equipmentId,
        report.description,
        report.severity.display,
        report.reportDate.isoformat(),
    ]
    match report:
        case HardwareReport(componentType=component, serialNumber=serial, needsReplacement=replace):
            return common + [component, str(serial), YES_NO[0] if replace else YES_NO[1]]
        case SoftwareReport(operatingSystem=os_name, softwareName=name, version=version):
            return common + [os_name, name, version]
        case _:
            raise TypeError(f"Unsupported report type {type(report).__name__}")


def format_report_line(report: Report) -> str:
    # e.g. "EQ1 - Disco dañado - Alto - 2025-05-18 - Disk - 12345 - Si"
    return FIELD_SEPARATOR.join(report_fields(report))


def export_file_name(kind: ReportKind, when: datetime) -> str:
    return f"Reporte_{kind.value}_{when:%Y-%m-%d}_{when:%H-%M-%S}.txt"


def write_reports(reports: Iterable[Report], outfile: TextIO) -> None:
    for report in reports:
        outfile.write(format_report_line(report))
        outfile.write("\n")
