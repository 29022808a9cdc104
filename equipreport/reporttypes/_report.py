# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, Union

from dataclasses_json import config, dataclass_json

from ._severity import Severity

# pylint: disable=invalid-name


class ReportKind(Enum):
    HARDWARE = "Hardware"
    SOFTWARE = "Software"


@dataclass_json
@dataclass(frozen=True)
class ReportBase:
    """Fields shared by every incident report. Reports are never modified once built."""

    equipmentId: str
    description: str
    severity: Severity
    reportDate: date = field(
        metadata=config(encoder=date.isoformat, decoder=date.fromisoformat)
    )


@dataclass_json
@dataclass(frozen=True)
class HardwareReport(ReportBase):
    kind: ClassVar[ReportKind] = ReportKind.HARDWARE

    componentType: str
    # must be > 0; checked by validators.validate_serial_number before construction
    serialNumber: int
    needsReplacement: bool


@dataclass_json
@dataclass(frozen=True)
class SoftwareReport(ReportBase):
    kind: ClassVar[ReportKind] = ReportKind.SOFTWARE

    operatingSystem: str
    softwareName: str
    # A.B.C, checked by validators.validate_software_version
    version: str


Report = Union[HardwareReport, SoftwareReport]
